"""Language server for Alloy style sheets (.tss)."""
