"""Column types shared by the models."""

from sqlalchemy import JSON, Numeric
from sqlalchemy.dialects.postgresql import JSONB

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")

# Money / area columns: NUMERIC in the database, floats in Python
Decimal10_2 = Numeric(10, 2, asdecimal=False)
