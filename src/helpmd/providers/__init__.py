"""Help records and the sources they are loaded from.

Submodules:
  records     -- HelpRecord and ParameterInfo Pydantic models
  docstrings  -- Google-style docstring parsing
  loaders     -- load phase: Python modules, Python scripts, JSON help exports
  registry    -- CommandRegistry, the resolve phase (lookup by command name)
"""
