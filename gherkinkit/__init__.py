"""Gherkin document model, builder from parser events, JSON renderer and pickle compiler."""

__version__ = "0.1.0"
__all__ = ["ast", "ast_node", "ast_builder", "ast_printer", "compiler", "attachment"]