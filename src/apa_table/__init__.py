"""Convert CSV/TSV or pasted text into APA-style tables with Word and PNG export."""
