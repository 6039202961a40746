# studio_database.py

from extensions import db
from utils.datetime_utils import utc_now


# --- User Model (identity store) ---
class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)  # Stored lower-cased
    name = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(30), nullable=True)
    created_at = db.Column(db.DateTime, default=utc_now)

    memberships = db.relationship('Membership', backref='user', lazy=True, cascade="all, delete-orphan")

    def __repr__(self):
        return f'<User {self.email}>'


# --- Membership Model (user <-> studio association) ---
class Membership(db.Model):
    __table_args__ = (
        # One membership per person per studio; re-imports rely on this
        db.UniqueConstraint('user_id', 'studio_id', name='uq_membership_user_studio'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    studio_id = db.Column(db.String(64), nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False, default='member')  # 'member', 'instructor', 'admin', 'owner'
    status = db.Column(db.String(20), nullable=False, default='active')  # 'active', 'paused', 'cancelled'
    joined_at = db.Column(db.DateTime, default=utc_now)

    def __repr__(self):
        return f'<Membership user={self.user_id} studio={self.studio_id} {self.status}>'
