"""
Exercise categorization by keyword.

Maps a free-text exercise name to a muscle-group category using a
static keyword lexicon. Keywords are checked in definition order and
the first substring match wins, so more specific phrases ("leg curl")
are listed before the generic ones they contain ("curl").
"""

from typing import Optional

CATEGORY_KEYWORDS = {
    "squat": "Quads",
    "leg press": "Quads",
    "leg extension": "Quads",
    "lunge": "Quads",
    "leg curl": "Hamstrings",
    "rdl": "Hamstrings",
    "deadlift": "Hamstrings",
    "hip thrust": "Glutes",
    "glute": "Glutes",
    "calf": "Calves",
    "bench": "Chest",
    "chest press": "Chest",
    "incline": "Chest",
    "fly": "Chest",
    "pec deck": "Chest",
    "lat pulldown": "Back",
    "pull-up": "Back",
    "row": "Back",
    "pullover": "Back",
    "shrug": "Back",
    "lateral raise": "Shoulders",
    "shoulder press": "Shoulders",
    "rear delt": "Shoulders",
    "y-raise": "Shoulders",
    "curl": "Biceps",
    "triceps": "Triceps",
    "tricep": "Triceps",
    "kickback": "Triceps",
    "crunch": "Abs",
    "ab ": "Abs",
    "wrist": "Forearms",
    "dead hang": "Grip",
}


def categorize_exercise(name: Optional[str]) -> Optional[str]:
    """
    Return the muscle-group category for an exercise name.

    Args:
        name: Exercise name as written in the sheet

    Returns:
        Category such as "Chest", or None when no keyword matches
    """
    if not name:
        return None
    lowered = name.lower()
    for keyword, category in CATEGORY_KEYWORDS.items():
        if keyword in lowered:
            return category
    return None
