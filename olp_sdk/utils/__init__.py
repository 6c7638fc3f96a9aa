"""Pure helpers: tile keys, HRNs, and lookup URL resolution."""
