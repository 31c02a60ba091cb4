"""Pure table-generation engine: delimiter-separated text in, APA table markup out.

Submodules:
  constants  -- recognised alignments, delimiters, and fixed strings
  schema     -- Pydantic models (RawInput, Grid, StyleSpec, RenderedTable, EngineState)
  delimiter  -- comma-vs-tab detection for pasted text and uploaded files
  grid       -- raw text -> rectangular grid of trimmed cells
  alignment  -- free-text alignment spec -> per-column effective alignment
  caption    -- caption number/title and note composition
  render     -- HTML markup synthesis
  pipeline   -- acquisition helpers, state transitions, and recompute()
"""
