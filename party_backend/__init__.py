"""Party progression and scoring engine."""
