import sys
from sqlalchemy.orm import Session
from ..core.db import init_db, session_scope
from ..models.location import LocationRow
from ..models.railcard import RailcardRow

# a handful of stations for local development (nlc, crs, name)
LOCATIONS = [
    ("1444", "EUS", "LONDON EUSTON"),
    ("2968", "MAN", "MANCHESTER PICCADILLY"),
    ("1127", "BHM", "BIRMINGHAM NEW STREET"),
    ("5426", "LDS", "LEEDS"),
    ("9422", "EDB", "EDINBURGH"),
    ("1072", "",    "LONDON TERMINALS"),
]

# code, name, min_adults, max_adults, min_children, max_children
RAILCARDS = [
    ("",    "Public",               0, 9, 0, 9),
    ("YNG", "16-25 Railcard",       1, 1, 0, 0),
    ("SRN", "Senior Railcard",      1, 1, 0, 0),
    ("FAM", "Family & Friends",     1, 4, 1, 4),
    ("TST", "Two Together",         2, 2, 0, 0),
]

def seed(db: Session) -> int:
    added = 0
    for nlc, crs, name in LOCATIONS:
        if db.get(LocationRow, nlc) is None:
            db.add(LocationRow(nlc=nlc, crs=crs or None, name=name))
            added += 1
    for code, name, min_a, max_a, min_c, max_c in RAILCARDS:
        if db.get(RailcardRow, code) is None:
            db.add(RailcardRow(code=code, name=name, min_adults=min_a, max_adults=max_a,
                               min_children=min_c, max_children=max_c))
            added += 1
    db.commit()
    return added

def main() -> None:
    init_db()
    with session_scope() as db:
        n = seed(db)
    print(f"seeded {n} rows")

if __name__ == "__main__":
    if len(sys.argv) != 1:
        print("usage: python -m railfare.utils.seed", file=sys.stderr)
        sys.exit(1)
    main()
