"""Framework-free identity resolution: store contract, lookups, resolver and guard."""
