"""Exporters that consume a RenderedTable: Word document shell and PNG raster."""
