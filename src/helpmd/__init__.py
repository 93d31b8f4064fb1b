"""Render command help into GitHub-Flavoured Markdown from a placeholder template.

Subpackages:
  markdown   -- table model and renderer, help-to-markdown conversion, template engine
  providers  -- help records and the command registry they are resolved from
"""
