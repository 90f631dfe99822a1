"""English catalog; present so "en" counts as supported."""

MESSAGES = {
    "Remove": "Remove",
}
