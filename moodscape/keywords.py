"""
Keyword tables used by the heuristic analyzers.

Kept as plain data so they can be extended without touching the scoring code.
Mood keywords are matched against whole lowercase tokens, so inflections
are listed explicitly.
"""

MOOD_KEYWORDS = {
    "excited": {
        "excited", "exciting", "thrilled", "energetic", "adventure", "party",
        "celebration", "celebrate", "amazing", "pumped", "eager", "hyped",
        "ecstatic", "awesome",
    },
    "happy": {
        "happy", "wonderful", "great", "love", "loved", "perfect", "good",
        "pleased", "glad", "joy", "joyful", "grateful", "thankful", "blessed",
        "fantastic", "delighted",
    },
    "calm": {
        "calm", "peaceful", "relaxed", "relaxing", "quiet", "serene",
        "meditation", "meditated", "tranquil", "rested", "content", "mindful",
    },
    "neutral": {
        "okay", "ok", "fine", "normal", "regular", "usual", "routine",
        "ordinary", "average",
    },
    "stressed": {
        "stress", "stressed", "stressful", "anxious", "anxiety", "worried",
        "worry", "overwhelmed", "pressure", "busy", "deadline", "deadlines",
        "tense", "panic", "nervous",
    },
    "sad": {
        "sad", "down", "disappointed", "hurt", "lonely", "crying", "cried",
        "upset", "depressed", "tears", "miss", "lost", "heartbroken",
        "unhappy",
    },
}

# Life-domain themes used to pick a reflection, in priority order.
REFLECTION_THEME_KEYWORDS = {
    "work": {
        "work", "job", "meeting", "meetings", "deadline", "project", "career",
        "boss", "office", "colleague", "colleagues", "promotion", "interview",
    },
    "relationships": {
        "family", "friend", "friends", "relationship", "love", "partner",
        "connect", "mom", "dad", "sister", "brother", "wife", "husband",
        "kids",
    },
    "stress": {
        "stress", "stressed", "worried", "anxious", "difficult", "hard",
        "struggle", "struggling", "overwhelmed", "tough",
    },
    "joy": {
        "happy", "excited", "amazing", "wonderful", "great", "joy",
        "grateful", "proud", "fun",
    },
}

# Broader topic tags stored on each entry.
ENTRY_THEME_KEYWORDS = {
    "work": ["work", "job", "office", "meeting", "project", "deadline", "boss", "colleague"],
    "family": ["family", "mom", "dad", "parent", "sister", "brother", "child", "kid"],
    "friends": ["friend", "hangout", "party", "social", "catch up"],
    "health": ["gym", "workout", "exercise", "run", "walk", "yoga", "sleep", "tired", "energy"],
    "food": ["breakfast", "lunch", "dinner", "cook", "restaurant", "coffee"],
    "learning": ["study", "learn", "course", "book", "practice", "skill"],
    "travel": ["travel", "trip", "vacation", "flight", "visit", "explore"],
    "creativity": ["write", "art", "music", "create", "design", "build"],
}

THEME_LABELS = {
    "work": "work and career",
    "relationships": "relationships and family",
    "stress": "stress and difficulty",
    "joy": "positive moments",
}

POSITIVE_WORDS = {
    "happy", "joy", "excited", "amazing", "wonderful", "great", "love",
    "grateful", "proud", "accomplished", "calm", "peaceful", "good",
    "fantastic", "enjoyed", "fun", "relieved", "hopeful", "thankful",
}

NEGATIVE_WORDS = {
    "sad", "stress", "stressed", "anxious", "worried", "overwhelmed",
    "difficult", "hard", "angry", "upset", "tired", "lonely", "hurt",
    "frustrated", "disappointed", "scared", "exhausted", "awful",
}

STOPWORDS = {
    "a", "about", "after", "again", "all", "also", "am", "an", "and", "any",
    "are", "as", "at", "be", "because", "been", "before", "being", "but",
    "by", "can", "could", "did", "do", "does", "doing", "down", "during",
    "each", "even", "for", "from", "had", "has", "have", "having", "he",
    "her", "here", "hers", "him", "his", "how", "i", "if", "in", "into",
    "is", "it", "its", "just", "like", "me", "more", "most", "much", "my",
    "myself", "no", "not", "now", "of", "off", "on", "once", "only", "or",
    "other", "our", "out", "over", "really", "same", "she", "should", "so",
    "some", "such", "than", "that", "the", "their", "them", "then", "there",
    "these", "they", "this", "those", "through", "to", "today", "too",
    "under", "until", "up", "very", "was", "we", "were", "what", "when",
    "where", "which", "while", "who", "why", "will", "with", "would", "you",
    "your", "got", "get", "felt", "feel", "feeling", "went", "still",
    "though", "think", "thing", "things", "day", "dont", "didnt", "cant",
    "im", "ive", "its", "lot",
}
