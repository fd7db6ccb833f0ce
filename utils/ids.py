import time
import random
import string
import datetime as dt


def create_id_with_prefix(prefix: str) -> str:
    # timestamp + 4 random chars
    stamp = int(time.time() * 1000)
    rand = ''.join(random.choices(string.ascii_lowercase + string.digits, k=4))
    return f"{prefix}_{stamp}_{rand}"


def control_number(year: int = None) -> str:
    """PLN-<year>-<5 digits>. Random, so collisions are possible."""
    year = year or dt.date.today().year
    return f"PLN-{year}-{random.randint(10000, 99999)}"


def application_number() -> str:
    """APP-<6 digits>. Random, so collisions are possible."""
    return f"APP-{random.randint(100000, 999999)}"
