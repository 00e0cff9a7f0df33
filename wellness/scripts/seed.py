from datetime import datetime, time, timedelta
from decimal import Decimal

from sqlmodel import Session, select

from wellness.core.security import get_password_hash
from wellness.database import create_db_and_tables, engine
from wellness.models.appointment import Appointment
from wellness.models.client import Client
from wellness.models.package import Package
from wellness.models.service import Service
from wellness.models.user import User


OWNER_EMAIL = "demo@wellness.local"
OWNER_PASSWORD = "demo123"


def main():
    create_db_and_tables()

    with Session(engine) as session:
        # 1) conta de demonstração
        owner = session.exec(select(User).where(User.email == OWNER_EMAIL)).first()
        if not owner:
            owner = User(
                email=OWNER_EMAIL,
                password_hash=get_password_hash(OWNER_PASSWORD),
                business_name="Studio Equilíbrio",
                first_name="Ana",
                last_name="Souza",
            )
            session.add(owner)
            session.commit()
            session.refresh(owner)

        # 2) serviços (se não existir)
        existing_service = session.exec(
            select(Service).where(Service.user_id == owner.id)
        ).first()

        if not existing_service:
            session.add_all(
                [
                    Service(name="Yoga Session", duration_minutes=60, price=Decimal("80.00"), user_id=owner.id),
                    Service(name="Nutritional Consultation", duration_minutes=45, price=Decimal("95.00"), user_id=owner.id),
                    Service(name="Wellness Coaching", duration_minutes=60, price=Decimal("110.00"), user_id=owner.id),
                ]
            )

        # 3) pacotes
        existing_package = session.exec(
            select(Package).where(Package.user_id == owner.id)
        ).first()

        if not existing_package:
            session.add_all(
                [
                    Package(name="Yoga 10", price=Decimal("700.00"), session_count=10, validity_days=90, user_id=owner.id),
                    Package(name="Coaching 4", price=Decimal("400.00"), session_count=4, validity_days=60, user_id=owner.id),
                ]
            )

        # 4) clientes + um agendamento amanhã às 9h
        existing_client = session.exec(
            select(Client).where(Client.user_id == owner.id)
        ).first()

        if not existing_client:
            sarah = Client(first_name="Sarah", last_name="Johnson", email="sarah@example.com", user_id=owner.id)
            michael = Client(first_name="Michael", last_name="Chen", email="michael@example.com", user_id=owner.id)
            session.add_all([sarah, michael])
            session.commit()
            session.refresh(sarah)

            tomorrow = (datetime.now() + timedelta(days=1)).date()
            start = datetime.combine(tomorrow, time(9, 0))
            session.add(
                Appointment(
                    user_id=owner.id,
                    client_id=sarah.id,
                    title="Yoga Session",
                    start_time=start,
                    end_time=start + timedelta(hours=1),
                )
            )

        session.commit()

        print("✅ Seed concluído!")
        print(f"Conta: {owner.email} / {OWNER_PASSWORD}")


if __name__ == "__main__":
    main()
