"""Domain layer: entities, interfaces, exceptions and ledger rules."""
