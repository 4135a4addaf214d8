from coursehub.extensions import db
from datetime import datetime

class Payment(db.Model):
    """A verified gateway payment. One row per (order id, payment id)."""
    __tablename__ = "payment"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    razorpay_order_id = db.Column(db.String(100), nullable=False)
    razorpay_payment_id = db.Column(db.String(100), unique=True, nullable=False)
    course_ids = db.Column(db.JSON, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship("User")

    def __repr__(self):
        return f"<Payment {self.razorpay_order_id}|{self.razorpay_payment_id}>"
