from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

# === Catalog (read-only here, except vehicles.status) ===

vehicles = Table(
    "vehicles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(150), nullable=False),
    Column("daily_rate", Numeric(12, 2), nullable=False),
    Column("weekly_rate", Numeric(12, 2), nullable=False),
    Column("monthly_rate", Numeric(12, 2), nullable=False),
    Column("status", String(32), nullable=False, default="AVAILABLE"),
)

locations = Table(
    "locations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(150), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

extra_prices = Table(
    "extra_prices",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(150), nullable=False),
    Column("daily_price", Numeric(12, 2), nullable=False),
    Column("weekly_price", Numeric(12, 2), nullable=False),
    Column("monthly_price", Numeric(12, 2), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

# === Bookings ===

bookings = Table(
    "bookings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("booking_number", String(32), nullable=False, unique=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("vehicle_id", Integer, ForeignKey("vehicles.id"), nullable=False),
    Column("pickup_location_id", Integer, ForeignKey("locations.id"), nullable=False),
    Column("return_location_id", Integer, ForeignKey("locations.id"), nullable=False),
    Column("start_at", DateTime(timezone=True), nullable=False),
    Column("end_at", DateTime(timezone=True), nullable=False),
    Column("total_days", Integer, nullable=False),
    Column("rental_cost", Numeric(12, 2), nullable=False),
    Column("extras_cost", Numeric(12, 2), nullable=False),
    Column("discount", Numeric(12, 2), nullable=False, default=0),
    Column("final_amount", Numeric(12, 2), nullable=False),
    Column("status", String(32), nullable=False),
    Column("notes", Text),
    Column("cancellation_reason", String(500)),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

Index("ix_bookings_vehicle_span", bookings.c.vehicle_id, bookings.c.start_at, bookings.c.end_at)
Index("ix_bookings_status_end", bookings.c.status, bookings.c.end_at)

booking_lines = Table(
    "booking_lines",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("booking_id", Integer, ForeignKey("bookings.id"), nullable=False, index=True),
    Column("extra_id", Integer, ForeignKey("extra_prices.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price", Numeric(12, 2), nullable=False),
    Column("total_price", Numeric(12, 2), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

# === Loyalty ledger ===

loyalty_transactions = Table(
    "loyalty_transactions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("points", Integer, nullable=False),
    Column("transaction_type", String(32), nullable=False),
    Column("earn_reason", String(32)),
    Column("description", String(500)),
    Column("booking_id", Integer),
    Column("transaction_date", DateTime(timezone=True), nullable=False),
    Column("expiry_date", DateTime(timezone=True)),
    Column("is_expired", Boolean, nullable=False, default=False),
    # "<user_id>:<booking_id>" on EARNED rows tied to a booking, NULL otherwise.
    # NULLs never collide, so only booking awards are constrained.
    Column("earn_key", String(100), unique=True),
)

Index(
    "ix_loyalty_due_expiry",
    loyalty_transactions.c.is_expired,
    loyalty_transactions.c.expiry_date,
)

loyalty_accounts = Table(
    "loyalty_accounts",
    metadata,
    Column("user_id", String(64), primary_key=True),
    Column("available_points", Integer, nullable=False, default=0),
    Column("total_points", Integer, nullable=False, default=0),
    Column("lifetime_earned", Integer, nullable=False, default=0),
    Column("lifetime_redeemed", Integer, nullable=False, default=0),
    Column("updated_at", DateTime(timezone=True)),
)
