"""Column types that map to PostgreSQL natives and degrade to generic types elsewhere."""
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB

# Array of tag strings
TagList = JSON().with_variant(JSONB(), "postgresql")
