"""
Render engine: frame → glyph cells → diffed, batched canvas edits
"""
