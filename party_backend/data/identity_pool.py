"""Pools for anonymous player identities."""

from __future__ import annotations

# ---- ALIASES (music and party themed, 2 words) ----
ALIAS_POOL = [
    "Shadow Wolf", "Midnight Phoenix", "Cosmic Dancer", "Neon Phantom",
    "Stellar Viper", "Lunar Echo", "Nova Spark", "Astral Raven",
    "Bass Bandit", "Rhythm Ghost", "Sonic Specter", "Beat Ninja",
    "Melody Mystic", "Tempo Thief", "Vinyl Vortex", "Synth Serpent",
    "Electric Falcon", "Thunder Fox", "Crystal Cobra", "Frost Panther",
    "Storm Hawk", "Ember Tiger", "Ocean Owl", "Jade Dragon",
    "Velvet Shadow", "Chrome Sphinx", "Prism Prowler", "Cipher Knight",
    "Quantum Jester", "Void Walker", "Pixel Phantom", "Glitch Wizard",
    "Neon Nomad", "Disco Demon", "Funk Fury", "Groove Guardian",
    "Pulse Pioneer", "Wave Warrior", "Echo Enigma", "Drift Dancer",
]

# ---- SILHOUETTES (animals, characters, geometric) ----
AVATAR_SILHOUETTES = [
    "wolf", "phoenix", "cat", "owl", "fox", "raven", "panther", "dragon",
    "robot", "ghost", "ninja", "wizard", "knight", "jester", "sphinx", "alien",
    "diamond", "star", "moon", "sun", "crystal", "prism", "orb", "flame",
]

# ---- COLORS (neon palette, hex) ----
PLAYER_COLORS = [
    "#A855F7", "#06B6D4", "#EC4899",
    "#8B5CF6", "#3B82F6", "#14B8A6", "#22C55E", "#EAB308",
    "#F97316", "#EF4444", "#F472B6", "#818CF8",
    "#C084FC", "#22D3EE", "#34D399", "#FBBF24",
]
