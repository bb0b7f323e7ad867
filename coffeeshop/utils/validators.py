import re
from typing import Optional


def clean_phone(v: Optional[str]) -> Optional[str]:
    """Strip spaces, dashes and brackets; reject anything but digits and '+'."""
    if v:
        cleaned = re.sub(r"[\s\-\(\)]", "", v)
        if not cleaned.replace("+", "").isdigit():
            raise ValueError("Invalid phone number")
        return cleaned
    return v
