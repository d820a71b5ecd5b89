"""Domain layer: policy model, ports, baseline reconciliation and diagnostics."""
