from .deserialiser import document_to_graph, load_document
from .schema import SchemaError, validate, validate_file

__all__ = ["SchemaError", "validate", "validate_file", "document_to_graph", "load_document"]
