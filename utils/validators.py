import re

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

def is_valid_email(email: str) -> bool:
    return bool(email) and bool(EMAIL_RE.match(email))

def is_valid_name(name: str) -> bool:
    return bool(name and name.strip())
