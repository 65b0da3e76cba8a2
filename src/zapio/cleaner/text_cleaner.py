import re

# Mojibake left behind by some PDF producers
ARTIFACTS = {
    "ï¿½": "",
    "�": "",
    "â€“": "-",
    "â€™": "'",
    "â€œ": '"',
    "â€\x9d": '"',
}


def clean_text(text: str) -> str:
    for bad, good in ARTIFACTS.items():
        text = text.replace(bad, good)

    # Normalize spacing while preserving paragraph breaks
    text = re.sub(r"\r\n?", "\n", text)
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)

    return text.strip()
