from ygocli.storage.json_document import JsonDocument

__all__ = ["JsonDocument"]
