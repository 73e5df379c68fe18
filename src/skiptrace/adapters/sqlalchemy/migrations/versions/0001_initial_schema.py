"""Initial schema: contacts, phones, lookups, properties and pipeline records.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _audit_columns() -> list[sa.Column[object]]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "contact",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("identity_key", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("mailing_address", sa.String(), nullable=True),
        sa.Column("mailing_city", sa.String(), nullable=True),
        sa.Column("mailing_state", sa.String(), nullable=True),
        sa.Column("mailing_zip", sa.String(), nullable=True),
        sa.Column("age", sa.String(), nullable=True),
        sa.Column("deceased", sa.String(length=1), nullable=True),
        sa.Column("search_status", sa.String(length=32), nullable=True),
        sa.Column("searched_at", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_contact")),
        sa.UniqueConstraint("identity_key", name=op.f("uq_contact_contact_identity_key")),
    )
    op.create_table(
        "lookup",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("phone_number", sa.String(), nullable=False),
        sa.Column("caller_id_label", sa.String(length=32), nullable=True),
        sa.Column("caller_name", sa.String(), nullable=True),
        sa.Column("caller_name_error_code", sa.String(), nullable=True),
        sa.Column("carrier_name", sa.String(), nullable=True),
        sa.Column("carrier_type", sa.String(), nullable=True),
        sa.Column("carrier_error_code", sa.String(), nullable=True),
        sa.Column("mobile_country_code", sa.String(), nullable=True),
        sa.Column("mobile_network_code", sa.String(), nullable=True),
        sa.Column("country_code", sa.String(), nullable=True),
        sa.Column("national_format", sa.String(), nullable=True),
        sa.Column("record_type", sa.String(), nullable=True),
        sa.Column("line_type", sa.String(), nullable=True),
        sa.Column("lrn", sa.String(), nullable=True),
        sa.Column("ocn", sa.String(), nullable=True),
        sa.Column("ported_date", sa.String(), nullable=True),
        sa.Column("ported_status", sa.String(), nullable=True),
        sa.Column("spid", sa.String(), nullable=True),
        sa.Column("spid_carrier_name", sa.String(), nullable=True),
        sa.Column("spid_carrier_type", sa.String(), nullable=True),
        sa.Column("altspid", sa.String(), nullable=True),
        sa.Column("altspid_carrier_name", sa.String(), nullable=True),
        sa.Column("altspid_carrier_type", sa.String(), nullable=True),
        sa.Column("portability_city", sa.String(), nullable=True),
        sa.Column("portability_state", sa.String(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_lookup")),
        sa.UniqueConstraint("phone_number", name=op.f("uq_lookup_lookup_phone_number")),
    )
    op.create_table(
        "phone",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("contact_id", sa.Uuid(), nullable=False),
        sa.Column("number", sa.String(), nullable=False),
        sa.Column("phone_type", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("validation_tag", sa.String(length=8), nullable=True),
        sa.Column("lookup_id", sa.Uuid(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(
            ["contact_id"], ["contact.id"], name=op.f("fk_phone_phone_contact_id_contact")
        ),
        sa.ForeignKeyConstraint(
            ["lookup_id"], ["lookup.id"], name=op.f("fk_phone_phone_lookup_id_lookup")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_phone")),
        sa.UniqueConstraint("contact_id", "number", name=op.f("uq_phone_phone_contact_id")),
    )
    op.create_index(op.f("ix_phone_contact_id"), "phone", ["contact_id"], unique=False)
    op.create_table(
        "relation",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("from_contact_id", sa.Uuid(), nullable=False),
        sa.Column("to_contact_id", sa.Uuid(), nullable=False),
        sa.Column("relation_type", sa.String(length=32), nullable=False),
        sa.Column("confirmation_count", sa.Integer(), nullable=False),
        sa.Column("confirmed_bidirectional", sa.Boolean(), nullable=False),
        sa.Column("last_confirmed_at", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(
            ["from_contact_id"],
            ["contact.id"],
            name=op.f("fk_relation_relation_from_contact_id_contact"),
        ),
        sa.ForeignKeyConstraint(
            ["to_contact_id"],
            ["contact.id"],
            name=op.f("fk_relation_relation_to_contact_id_contact"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_relation")),
        sa.UniqueConstraint(
            "from_contact_id",
            "to_contact_id",
            name=op.f("uq_relation_relation_from_contact_id"),
        ),
    )
    op.create_table(
        "property_details",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("identity_key", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("zip", sa.String(), nullable=True),
        sa.Column("contact_id", sa.Uuid(), nullable=True),
        sa.Column("bedrooms", sa.String(), nullable=True),
        sa.Column("bathrooms", sa.String(), nullable=True),
        sa.Column("square_feet", sa.String(), nullable=True),
        sa.Column("year_built", sa.String(), nullable=True),
        sa.Column("heating_type", sa.String(), nullable=True),
        sa.Column("air_conditioner", sa.String(), nullable=True),
        sa.Column("building_use_code", sa.String(), nullable=True),
        sa.Column("parcel_id", sa.String(), nullable=True),
        sa.Column("apn", sa.String(), nullable=True),
        sa.Column("last_sale_price", sa.String(), nullable=True),
        sa.Column("last_sold", sa.String(), nullable=True),
        sa.Column("tax_delinquent_value", sa.String(), nullable=True),
        sa.Column("years_behind_on_taxes", sa.String(), nullable=True),
        sa.Column("foreclosure_date", sa.String(), nullable=True),
        sa.Column("bankruptcy_recording_date", sa.String(), nullable=True),
        sa.Column("lien_type", sa.String(), nullable=True),
        sa.Column("cdu", sa.String(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(
            ["contact_id"],
            ["contact.id"],
            name=op.f("fk_property_details_property_details_contact_id_contact"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_property_details")),
        sa.UniqueConstraint(
            "identity_key", name=op.f("uq_property_details_property_details_identity_key")
        ),
    )
    op.create_table(
        "property_list",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_property_list")),
        sa.UniqueConstraint("name", name=op.f("uq_property_list_property_list_name")),
    )
    op.create_table(
        "property_list_membership",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("property_id", sa.Uuid(), nullable=False),
        sa.Column("list_id", sa.Uuid(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(
            ["property_id"],
            ["property_details.id"],
            name=op.f("fk_property_list_membership_property_list_membership_property_id_property_details"),
        ),
        sa.ForeignKeyConstraint(
            ["list_id"],
            ["property_list.id"],
            name=op.f("fk_property_list_membership_property_list_membership_list_id_property_list"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_property_list_membership")),
        sa.UniqueConstraint(
            "property_id",
            "list_id",
            name=op.f("uq_property_list_membership_property_list_membership_property_id"),
        ),
    )
    op.create_table(
        "ownership",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("property_id", sa.Uuid(), nullable=False),
        sa.Column("contact_id", sa.Uuid(), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False),
        sa.Column("ownership_type", sa.String(length=32), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(
            ["property_id"],
            ["property_details.id"],
            name=op.f("fk_ownership_ownership_property_id_property_details"),
        ),
        sa.ForeignKeyConstraint(
            ["contact_id"],
            ["contact.id"],
            name=op.f("fk_ownership_ownership_contact_id_contact"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_ownership")),
        sa.UniqueConstraint(
            "property_id", "contact_id", name=op.f("uq_ownership_ownership_property_id")
        ),
    )
    op.create_table(
        "pipeline_record",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("property_id", sa.String(), nullable=False),
        sa.Column("stage", sa.String(length=32), nullable=False),
        sa.Column("decision", sa.String(), nullable=True),
        sa.Column("identity_key", sa.String(), nullable=True),
        sa.Column("contact_id", sa.Uuid(), nullable=True),
        sa.Column("property_details_id", sa.Uuid(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(
            ["contact_id"],
            ["contact.id"],
            name=op.f("fk_pipeline_record_pipeline_record_contact_id_contact"),
        ),
        sa.ForeignKeyConstraint(
            ["property_details_id"],
            ["property_details.id"],
            name=op.f("fk_pipeline_record_pipeline_record_property_details_id_property_details"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_pipeline_record")),
        sa.UniqueConstraint(
            "owner_id", "property_id", name=op.f("uq_pipeline_record_pipeline_record_owner_id")
        ),
    )
    op.create_index(
        op.f("ix_pipeline_record_stage"), "pipeline_record", ["stage"], unique=False
    )
    op.create_table(
        "owner_record",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("owner2_first_name", sa.String(), nullable=True),
        sa.Column("owner2_last_name", sa.String(), nullable=True),
        sa.Column("mailing_address", sa.String(), nullable=True),
        sa.Column("mailing_city", sa.String(), nullable=True),
        sa.Column("mailing_state", sa.String(), nullable=True),
        sa.Column("mailing_zip", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_owner_record")),
    )
    op.create_table(
        "property_record",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("zip", sa.String(), nullable=True),
        sa.Column("bedrooms", sa.String(), nullable=True),
        sa.Column("bathrooms", sa.String(), nullable=True),
        sa.Column("square_feet", sa.String(), nullable=True),
        sa.Column("year_built", sa.String(), nullable=True),
        sa.Column("heating_type", sa.String(), nullable=True),
        sa.Column("air_conditioner", sa.String(), nullable=True),
        sa.Column("building_use_code", sa.String(), nullable=True),
        sa.Column("parcel_id", sa.String(), nullable=True),
        sa.Column("apn", sa.String(), nullable=True),
        sa.Column("last_sale_price", sa.String(), nullable=True),
        sa.Column("last_sold", sa.String(), nullable=True),
        sa.Column("tax_delinquent_value", sa.String(), nullable=True),
        sa.Column("years_behind_on_taxes", sa.String(), nullable=True),
        sa.Column("foreclosure_date", sa.String(), nullable=True),
        sa.Column("bankruptcy_recording_date", sa.String(), nullable=True),
        sa.Column("lien_type", sa.String(), nullable=True),
        sa.Column("cdu", sa.String(), nullable=True),
        sa.Column("lists", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_property_record")),
    )


def downgrade() -> None:
    op.drop_table("property_record")
    op.drop_table("owner_record")
    op.drop_index(op.f("ix_pipeline_record_stage"), table_name="pipeline_record")
    op.drop_table("pipeline_record")
    op.drop_table("ownership")
    op.drop_table("property_list_membership")
    op.drop_table("property_list")
    op.drop_table("property_details")
    op.drop_table("relation")
    op.drop_index(op.f("ix_phone_contact_id"), table_name="phone")
    op.drop_table("phone")
    op.drop_table("lookup")
    op.drop_table("contact")
