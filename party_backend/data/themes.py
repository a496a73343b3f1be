"""Predefined party and round themes."""

from __future__ import annotations

# ---- PARTY THEMES (apply to every round of a party) ----
PARTY_THEMES = [
    {
        "theme_id": "anything-goes",
        "name": "Anything Goes",
        "description": "No restrictions - submit any song you love!",
        "icon": "🎵",
        "constraints": {},
    },
    {
        "theme_id": "throwback-party",
        "name": "Throwback Party",
        "description": "Songs from before 2010 only - take us back in time!",
        "icon": "⏪",
        "constraints": {"decades": ["1960s", "1970s", "1980s", "1990s", "2000s"]},
    },
    {
        "theme_id": "underground-only",
        "name": "Underground Only",
        "description": "Hidden gems and lesser-known tracks - no mainstream hits!",
        "icon": "🔦",
        "constraints": {"artistRestrictions": "No artists with over 1 million monthly listeners"},
    },
    {
        "theme_id": "high-energy",
        "name": "High Energy",
        "description": "Fast-paced bangers to get the party moving!",
        "icon": "⚡",
        "constraints": {"moods": ["energetic", "upbeat", "hype"], "bpmRange": {"min": 120, "max": 200}},
    },
    {
        "theme_id": "chill-vibes",
        "name": "Chill Vibes",
        "description": "Relaxed, mellow tracks for a laid-back atmosphere.",
        "icon": "🌊",
        "constraints": {"moods": ["chill", "relaxed", "mellow", "ambient"], "bpmRange": {"min": 60, "max": 110}},
    },
    {
        "theme_id": "guilty-pleasures",
        "name": "Guilty Pleasures",
        "description": "Songs you secretly love but might be embarrassed to admit!",
        "icon": "🙈",
        "constraints": {"moods": ["fun", "cheesy", "nostalgic"]},
    },
    {
        "theme_id": "one-hit-wonders",
        "name": "One Hit Wonders",
        "description": "Artists known for just one big song - find those gems!",
        "icon": "💫",
        "constraints": {"artistRestrictions": "Artists with only one major hit"},
    },
    {
        "theme_id": "decade-battle",
        "name": "Decade Battle",
        "description": "Each round features a different decade - compete across eras!",
        "icon": "🗓️",
        "constraints": {"decades": ["1970s", "1980s", "1990s", "2000s", "2010s", "2020s"]},
    },
]

# ---- ROUND THEMES (mood, challenge, genre) ----
ROUND_THEMES = [
    # Mood-based
    {"theme_id": "pump-up", "name": "Pump Up",
     "prompt": "Submit a song that gets you hyped and ready to go!",
     "voting_prompt": "How well does this song pump you up?", "icon": "💪", "bonus_multiplier": 1.0},
    {"theme_id": "tearjerker", "name": "Tearjerker",
     "prompt": "Submit a song that hits you right in the feels.",
     "voting_prompt": "How emotional does this song make you feel?", "icon": "😢", "bonus_multiplier": 1.0},
    {"theme_id": "feel-good", "name": "Feel Good",
     "prompt": "Submit a song that instantly puts you in a good mood!",
     "voting_prompt": "How much does this song lift your spirits?", "icon": "😊", "bonus_multiplier": 1.0},
    {"theme_id": "late-night", "name": "Late Night",
     "prompt": "Submit a song perfect for 2 AM vibes.",
     "voting_prompt": "How well does this fit the late night mood?", "icon": "🌙", "bonus_multiplier": 1.0},
    # Challenge-based
    {"theme_id": "deep-cut", "name": "Deep Cut",
     "prompt": "Submit a song most people probably haven't heard.",
     "voting_prompt": "How obscure is this track?", "icon": "💎", "bonus_multiplier": 1.2},
    {"theme_id": "guilty-pleasure", "name": "Guilty Pleasure",
     "prompt": "Submit a song you love but might be embarrassed to admit!",
     "voting_prompt": "How guilty of a pleasure is this?", "icon": "🙊", "bonus_multiplier": 1.1},
    {"theme_id": "one-word", "name": "One Word",
     "prompt": "Submit a song with a one-word title.",
     "voting_prompt": "Does this song nail the one-word title theme?", "icon": "1️⃣", "bonus_multiplier": 1.0},
    {"theme_id": "cover-version", "name": "Cover Version",
     "prompt": "Submit a cover that's better than (or as good as) the original!",
     "voting_prompt": "How does this cover stack up?", "icon": "🔄", "bonus_multiplier": 1.2},
    # Genre-specific
    {"theme_id": "electronic-dreams", "name": "Electronic Dreams",
     "prompt": "Submit your favorite electronic/EDM track.",
     "voting_prompt": "How well does this represent electronic music?", "icon": "🎛️", "bonus_multiplier": 1.0},
    {"theme_id": "hip-hop-heat", "name": "Hip-Hop Heat",
     "prompt": "Submit a hip-hop or rap track that goes hard.",
     "voting_prompt": "How hard does this track go?", "icon": "🎤", "bonus_multiplier": 1.0},
    {"theme_id": "rock-anthem", "name": "Rock Anthem",
     "prompt": "Submit a rock song that deserves to be played loud!",
     "voting_prompt": "Is this a true rock anthem?", "icon": "🎸", "bonus_multiplier": 1.0},
    {"theme_id": "indie-darling", "name": "Indie Darling",
     "prompt": "Submit an indie track that deserves more recognition.",
     "voting_prompt": "How indie is this track?", "icon": "🎹", "bonus_multiplier": 1.1},
]
