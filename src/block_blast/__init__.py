"""Block blast: grid puzzle engine with reward tiers."""
