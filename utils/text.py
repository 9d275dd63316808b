PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
CENSORED = "****"


def filter_profanity(body: str) -> str:
    """Replace whole profane words (case-insensitive) with ****.

    Words are split on whitespace, so "Sharbert!" is left alone.
    """
    words = body.split()
    return " ".join(CENSORED if word.lower() in PROFANE_WORDS else word for word in words)
