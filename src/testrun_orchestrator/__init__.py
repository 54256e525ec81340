"""Tag-aware pytest run orchestrator with multi-sink result delivery."""
