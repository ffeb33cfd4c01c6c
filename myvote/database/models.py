# myvote/database/models.py

from myvote import db
from datetime import datetime, timezone


def _utcnow():
    return datetime.now(timezone.utc)


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.String(36), primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    # Either may be NULL but never duplicated; the UNIQUE constraint closes
    # the check-then-insert race between concurrent registrations.
    email = db.Column(db.String(254), unique=True, nullable=True)
    phone = db.Column(db.String(32), unique=True, nullable=True)
    password_hash = db.Column(db.String(200), nullable=False)  # argon2id
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    age = db.Column(db.Integer, nullable=True)
    aadhar = db.Column(db.String(32), nullable=True)
    gender = db.Column(db.String(32), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)

    elections = db.relationship('Election', backref='creator', lazy=True)

    def __repr__(self):
        return f'<User {self.id}>'


class Election(db.Model):
    __tablename__ = 'elections'
    __table_args__ = (
        db.CheckConstraint('start_ts < end_ts', name='ck_elections_window'),
        db.CheckConstraint('total_seats > 0', name='ck_elections_seats'),
    )
    id = db.Column(db.String(10), primary_key=True)  # short id
    company_name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    total_seats = db.Column(db.Integer, nullable=False)
    start_ts = db.Column(db.BigInteger, nullable=False)  # epoch millis
    end_ts = db.Column(db.BigInteger, nullable=False)
    eligibility = db.Column(db.String(100), nullable=False, default='all')
    publish = db.Column(db.Boolean, nullable=False, default=False)
    created_by = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)

    candidates = db.relationship(
        'Candidate',
        backref='election',
        order_by='Candidate.position',
        cascade='all, delete-orphan',
        lazy=True,
    )

    def __repr__(self):
        return f'<Election {self.id}>'


class Candidate(db.Model):
    __tablename__ = 'candidates'
    __table_args__ = (
        db.UniqueConstraint('election_id', 'position', name='uq_candidates_position'),
    )
    id = db.Column(db.String(36), primary_key=True)
    election_id = db.Column(db.String(10), db.ForeignKey('elections.id'), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False)  # submission order
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    party = db.Column(db.String(100), nullable=False, default='')
    manifesto = db.Column(db.Text, nullable=False, default='')
    votes = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self):
        return f'<Candidate {self.id} in Election {self.election_id}>'
