"""Domain layer for csv-mapper.

This layer contains the column, schema and mapping entities together with
the type inference and mapping services. It knows nothing about files,
consoles or command lines.
"""
