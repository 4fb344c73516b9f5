"""
Catalog Search Package.

Client-side search for an equipment-rental catalog: accent and case
folding, common-typo correction, fuzzy field matching and relevance
ordering over an in-memory list of records.
"""

__version__ = "1.0.0"
