"""
Tests Module: Unit and Integration Tests

Test Coverage:
    - Tokenizers (bigrams, biunigrams, prefixes, suffixes)
    - Configuration and error types
    - Composite index engine (index and filter modes)
    - Indexes / Filters builders, limits and cross-consistency
    - InBuilder bit allocation
    - Value coercion, logging and CLI
"""
