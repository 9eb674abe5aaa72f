"""The `MetaData` every Lodestar table is defined on.

Its naming convention gives indexes, check constraints and primary keys the
same names on every backend, e.g. ``ix_roadmaps_owner`` and
``ck_roadmaps_non_negative_revision``.
"""

from sqlalchemy import MetaData

metadata = MetaData(
    naming_convention={
        "pk": "pk_%(table_name)s",
        "ix": "ix_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
    }
)
