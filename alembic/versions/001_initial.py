"""Initial schema: categories, materials, colors and products."""
from __future__ import annotations

from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute(
        """
        DO $$
        BEGIN
            IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = 'product_status') THEN
                CREATE TYPE product_status AS ENUM ('AVAILABLE', 'RENTED', 'MAINTENANCE');
            END IF;
        END$$;
        """
    )

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS categories (
            id UUID PRIMARY KEY,
            name VARCHAR(50) NOT NULL,
            color VARCHAR(7) NOT NULL,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
            created_by VARCHAR(100) NOT NULL
        );
        """
    )

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS materials (
            id UUID PRIMARY KEY,
            name VARCHAR(50) NOT NULL,
            price_per_unit NUMERIC(12, 2) NOT NULL,
            unit VARCHAR(20) NOT NULL,
            is_active BOOLEAN NOT NULL DEFAULT true,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
            created_by VARCHAR(100) NOT NULL
        );
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_materials_name_lower ON materials (lower(name));")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS colors (
            id UUID PRIMARY KEY,
            name VARCHAR(50) NOT NULL,
            hex_code VARCHAR(7),
            description VARCHAR(200),
            is_active BOOLEAN NOT NULL DEFAULT true,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
            created_by VARCHAR(100) NOT NULL
        );
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_colors_name_lower ON colors (lower(name));")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS products (
            id UUID PRIMARY KEY,
            code VARCHAR(4) NOT NULL,
            name VARCHAR(100) NOT NULL,
            description TEXT,
            size VARCHAR(20),
            category_id UUID NOT NULL REFERENCES categories(id),
            material_id UUID REFERENCES materials(id),
            color_id UUID REFERENCES colors(id),
            material_quantity INTEGER,
            material_cost NUMERIC(12, 2),
            modal_awal NUMERIC(12, 2) NOT NULL,
            harga_sewa NUMERIC(12, 2) NOT NULL,
            quantity INTEGER NOT NULL DEFAULT 0,
            status product_status NOT NULL DEFAULT 'AVAILABLE',
            image_url TEXT,
            total_pendapatan NUMERIC(14, 2) NOT NULL DEFAULT 0,
            is_active BOOLEAN NOT NULL DEFAULT true,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
            created_by VARCHAR(100) NOT NULL
        );
        """
    )

    # A code is unique among active products only; soft-deleted rows keep theirs.
    op.execute(
        """
        CREATE UNIQUE INDEX IF NOT EXISTS uq_products_code_active
        ON products (code) WHERE is_active;
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_products_category_id ON products (category_id);")


def downgrade() -> None:
    op.drop_index("ix_products_category_id", table_name="products")
    op.drop_index("uq_products_code_active", table_name="products")
    op.drop_table("products")

    op.drop_index("ix_colors_name_lower", table_name="colors")
    op.drop_table("colors")
    op.drop_index("ix_materials_name_lower", table_name="materials")
    op.drop_table("materials")
    op.drop_table("categories")

    op.execute("DROP TYPE IF EXISTS product_status")
