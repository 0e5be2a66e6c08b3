"""Day-offset engines (arithmetic, lookup table), leap rules, epoch anchoring and the orchestrator."""
