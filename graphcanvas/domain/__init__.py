"""
Domain Package

Graph models, analyzers and the layout simulator, free of I/O.
"""
