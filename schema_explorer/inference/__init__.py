"""
JSON Schema Inference Engine

Infers a practical JSON Schema document from a single JSON sample.

This package provides:
- Type inference for every JSON kind (null, boolean, integer, number, string, array, object)
- Unification of sibling array element schemas (object property union or anyOf)
- Cycle and depth guards for live in-memory object graphs
- Best-effort string format detection (uri, email, date, date-time)
- Support for compressed sample files (.gz, .bz2, .xz, .lzma)

Basic usage:
    from schema_explorer.inference.inference_engine import JSONSchemaInferenceEngine

    engine = JSONSchemaInferenceEngine()
    result = engine.analyze_value({"id": 1, "tags": ["a", "b"]})

    Or from file:
    result = engine.analyze_file("content/property.json")

    print(f"Root type: {result.root_type}")
    for name, fragment in result.schema.get("properties", {}).items():
        print(f"  {name}: {fragment.get('type', 'anyOf')}")
"""
