import enum

from osteovet import db
from osteovet.utils.util import utcnow


class Gender(enum.Enum):
    MALE = 'male'
    FEMALE = 'female'


class Animal(db.Model):
    __tablename__ = 'animal'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    breed = db.Column(db.String(100), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    weight = db.Column(db.Float)
    gender = db.Column(db.Enum(Gender), nullable=False)
    notes = db.Column(db.Text)
    owner_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    appointments = db.relationship('Appointment', backref='animal', lazy=True, cascade='all, delete-orphan')
    treatment_notes = db.relationship('TreatmentNote', backref='animal', lazy=True, cascade='all, delete-orphan',
                                      order_by='TreatmentNote.created_at.desc()')

    def __repr__(self):
        return f'<Animal {self.name} ({self.breed})>'


class TreatmentNote(db.Model):
    __tablename__ = 'treatment_note'
    id = db.Column(db.Integer, primary_key=True)
    animal_id = db.Column(db.Integer, db.ForeignKey('animal.id'), nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    author = db.relationship('User', foreign_keys=[author_id])

    def __repr__(self):
        return f'<TreatmentNote {self.id} for Animal {self.animal_id}>'
