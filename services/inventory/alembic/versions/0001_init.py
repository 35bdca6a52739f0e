from alembic import op
import sqlalchemy as sa

revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'inventory_items',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('quantity', sa.Integer, nullable=False, server_default='0'),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('supplier', sa.String(200), nullable=False),
        sa.Column('expiry_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('photo_url', sa.String(500), nullable=True),
    )
    # Not unique: the duplicate-name rule compares trimmed, case-folded names in the service
    op.create_index('ix_inventory_items_name', 'inventory_items', ['name'])

def downgrade():
    op.drop_index('ix_inventory_items_name', table_name='inventory_items')
    op.drop_table('inventory_items')
