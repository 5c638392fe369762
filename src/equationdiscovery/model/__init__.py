"""
The MODEL layer contains pure data structures: the value type catalog,
signature records and the equation database with its I/O.
It has NO knowledge of how signatures are discovered.
"""
