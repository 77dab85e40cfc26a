"""Teacher accounts recognised by the Teacher-Id header."""
from qr_attendance import db
from qr_attendance.models.base import BaseModel

class Teacher(BaseModel):
    """Teacher known to the system."""
    
    __tablename__ = 'teachers'
    
    teacher_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=True)
    
    @classmethod
    def find_by_teacher_id(cls, teacher_id: str) -> 'Teacher':
        return cls.query.filter_by(teacher_id=teacher_id).first()
    
    def __repr__(self) -> str:
        return f'<Teacher {self.teacher_id}>'
