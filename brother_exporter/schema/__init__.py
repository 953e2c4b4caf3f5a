# ==============================================
# TOPIC 2: SCHEMA
# ==============================================
#
# This package holds the declarative, per-model description of a
# maintenance CSV: which columns form the info observation, which
# regex groups and exact-name columns become metrics, and which
# columns are deliberately ignored.
#
# Modules:
# --------
# - rules.py     → IndexWindow, GroupRule, PlainRule, Schema (immutable)
# - registry.py  → SchemaRegistry (model name → Schema), schema file loading
# - models.py    → Built-in schemas for supported printer models
#
# ==============================================

from .rules import IndexWindow, GroupRule, PlainRule, Schema
from .registry import SchemaRegistry, default_registry, load_schema_file

__all__ = [
    "IndexWindow",
    "GroupRule",
    "PlainRule",
    "Schema",
    "SchemaRegistry",
    "default_registry",
    "load_schema_file",
]
