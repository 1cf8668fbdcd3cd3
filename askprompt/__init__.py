"""Interactive terminal prompts: a filterable select list, validators and transformers."""

__version__ = "2.0.0"