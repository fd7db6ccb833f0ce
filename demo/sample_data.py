import datetime as dt
import random
from typing import Optional, List, Dict, Any

from domain.constants import GENDERS, SENIOR_STATUSES
from services import seniors as senior_svc, applications as app_svc

FIRST_NAMES = ["Lourdes", "Ernesto", "Rosario", "Danilo", "Corazon", "Rodrigo", "Teresita",
               "Alfredo", "Milagros", "Romeo", "Erlinda", "Federico"]
LAST_NAMES = ["Dela Cruz", "Santos", "Reyes", "Bautista", "Garcia", "Mendoza", "Villanueva",
              "Aquino", "Ramos", "Castillo"]
BARANGAYS = ["Alipaoy", "Bagong Silang", "Handang Tumulong", "Harrison", "Lumangbayan",
             "Mananao", "Marikit", "Pag-asa", "Tubili"]


def _person(rng: random.Random) -> Dict[str, Any]:
    today = dt.date.today()
    born = dt.date(today.year - rng.randint(60, 95), rng.randint(1, 12), rng.randint(1, 28))
    return {
        'first_name': rng.choice(FIRST_NAMES),
        'last_name': rng.choice(LAST_NAMES),
        'dob': born.isoformat(),
        'gender': rng.choice(GENDERS[:2]),
        'address': f"Brgy. {rng.choice(BARANGAYS)}, Paluan, Occidental Mindoro",
        'contact_number': f"09{rng.randint(100000000, 999999999)}",
    }


def make_seniors(n: int = 10, seed: Optional[int] = None) -> List[Dict[str, Any]]:
    """Build n sample senior records (not persisted)."""
    rng = random.Random(seed)
    records = []
    for _ in range(n):
        fields = _person(rng)
        fields['status'] = rng.choices(SENIOR_STATUSES, weights=[8, 1, 1])[0]
        records.append(senior_svc.new_senior(fields))
    return records


def make_application_fields(n: int = 3, seed: Optional[int] = None) -> List[Dict[str, Any]]:
    """Fields for n public submissions, with placeholder photo/signature data URLs."""
    rng = random.Random(seed)
    placeholder = "data:image/png;base64,iVBORw0KGgo="
    return [{**_person(rng), 'photo': placeholder, 'signature': placeholder} for _ in range(n)]


def seed(n_seniors: int = 10, n_applications: int = 3) -> int:
    """Persist sample seniors and pending applications. Returns records written."""
    for record in make_seniors(n_seniors):
        senior_svc.save_senior(record)
    for fields in make_application_fields(n_applications):
        app_svc.submit_application(fields)
    return n_seniors + n_applications
