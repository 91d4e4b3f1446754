# Catalog adapters
from .yaml_catalog import YamlKanjiCatalog

__all__ = ["YamlKanjiCatalog"]
