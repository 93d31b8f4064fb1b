"""Markdown generation: tables, help fragments, and template substitution.

Submodules:
  patterns  -- compiled regex patterns shared by the converter and template engine
  schema    -- Alignment, Column and Table Pydantic models
  tables    -- GFM pipe-table rendering
  convert   -- HelpRecord to markdown fragment conversion
  template  -- placeholder tokenizer and TemplateEngine
"""
