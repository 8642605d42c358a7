"""RuleZero: Commander bracket classification."""
