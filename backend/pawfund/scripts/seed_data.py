"""Module: seed_data."""

from faker import Faker
import random
import string
from datetime import datetime, UTC, timedelta
from decimal import Decimal

from sqlalchemy import delete

from pawfund.db.init_db import init_db
from pawfund.db.session import SessionLocal
from pawfund.db.unit_of_work import UnitOfWork
from pawfund.services.donation_service import DonationService
from pawfund.services.pet_status_service import PetStatusService

from pawfund.db.models.user import User
from pawfund.db.models.shelter import Shelter
from pawfund.db.models.donation import Donation
from pawfund.db.models.pet import Pet
from pawfund.db.models.status import Status
from pawfund.db.models.pet_status import PetStatus

fake = Faker()

DOG_VAX = ["C5", "C3", "Rabies"]
CAT_VAX = ["F3", "FIV", "Rabies"]
DISEASES = ["None", "Kennel cough", "Parvovirus", "Feline flu", "Ear mites", "Ringworm", "Heartworm"]

DOG_BREEDS = [
    "Labrador Retriever",
    "German Shepherd",
    "Golden Retriever",
    "Poodle",
    "Beagle",
    "Border Collie",
    "Staffordshire Bull Terrier",
    "Siberian Husky",
    "Chihuahua",
]

CAT_BREEDS = [
    "Domestic Shorthair",
    "Domestic Longhair",
    "Maine Coon",
    "Ragdoll",
    "Siamese",
    "British Shorthair",
    "Russian Blue",
]


# Shared helpers used by multiple seed builders.
def generate_vn_mobile() -> str:
    return "09" + "".join(random.choice(string.digits) for _ in range(8))


def random_amount() -> Decimal:
    return Decimal(random.randint(5, 500)) + Decimal(random.choice([0, 25, 50, 99])) / 100


def reset_db(session) -> None:
    # Children before parents so FK constraints hold on every backend.
    for model in (PetStatus, Status, Donation, Pet, Shelter, User):
        session.execute(delete(model))
    session.commit()


def seed_donors(session, n: int = 50) -> list[User]:
    donors: list[User] = []
    for _ in range(n):
        donors.append(User(
            username=fake.unique.user_name(),
            email=fake.unique.email(),
            location=fake.city(),
            phone=generate_vn_mobile(),
            total_donation=Decimal("0"),
        ))
    session.add_all(donors)
    session.commit()
    return donors


def seed_shelters(session, n: int = 5) -> list[Shelter]:
    shelters: list[Shelter] = []
    for _ in range(n):
        name = f"{fake.last_name()} Animal Shelter"
        shelters.append(Shelter(
            name=name,
            location=fake.address().replace("\n", ", "),
            phone_number=generate_vn_mobile(),
            capacity=random.randint(20, 200),
            email=fake.unique.company_email(),
            website=fake.url(),
            donation_amount=Decimal("0"),
        ))
    session.add_all(shelters)
    session.commit()
    return shelters


def seed_pets(session, shelters: list[Shelter], n: int = 100) -> list[Pet]:
    # Build a mixed dog/cat population spread across shelters.
    pets: list[Pet] = []
    for _ in range(n):
        species = random.choice(["Dog", "Cat"])
        pets.append(Pet(
            shelter_id=random.choice(shelters).id,
            name=fake.first_name(),
            type=species,
            breed=random.choice(DOG_BREEDS if species == "Dog" else CAT_BREEDS),
            gender=random.choice(["Male", "Female"]),
            age=random.randint(0, 14),
            size=random.choice(["Small", "Medium", "Large"]),
            color=fake.color_name(),
            description=fake.sentence(nb_words=12),
            adoption_status=random.choice(["Available", "Pending", "Adopted"]),
        ))
    session.add_all(pets)
    session.commit()
    return pets


def seed_statuses(session, n: int = 40) -> list[Status]:
    now = datetime.now(UTC)
    statuses: list[Status] = []
    for _ in range(n):
        statuses.append(Status(
            date=now - timedelta(days=random.randint(0, 365)),
            disease=random.choice(DISEASES),
            vaccine=random.choice(DOG_VAX + CAT_VAX),
        ))
    session.add_all(statuses)
    session.commit()
    return statuses


def seed_pet_statuses(session, pets: list[Pet], statuses: list[Status]) -> int:
    # Goes through the association manager so the uniqueness rule is exercised.
    service = PetStatusService(UnitOfWork(session))
    n = 0
    for pet in pets:
        for status in random.sample(statuses, k=random.randint(0, 3)):
            service.add(pet.id, status.id)
            n += 1
    return n


def seed_donations(session, donors: list[User], shelters: list[Shelter], n: int = 300) -> int:
    # Donations go through the ledger so running totals stay consistent.
    service = DonationService(UnitOfWork(session))
    for _ in range(n):
        service.create(random_amount(), random.choice(donors).id, random.choice(shelters).id)
    return n


if __name__ == "__main__":
    # Full reseed pipeline: python -m pawfund.scripts.seed_data
    init_db()
    session = SessionLocal()
    try:
        print("Resetting tables...")
        reset_db(session)

        print("Seeding donors (50)...")
        donors = seed_donors(session, 50)

        print("Seeding shelters (5)...")
        shelters = seed_shelters(session, 5)

        print("Seeding pets (100)...")
        pets = seed_pets(session, shelters, 100)

        print("Seeding statuses (40)...")
        statuses = seed_statuses(session, 40)

        print("Linking pet statuses...")
        link_n = seed_pet_statuses(session, pets, statuses)

        print("Recording donations (300)...")
        donation_n = seed_donations(session, donors, shelters, 300)

        drift = DonationService(UnitOfWork(session)).find_total_drift()
        print(f"Done. pet_statuses={link_n}, donations={donation_n}, drifted_totals={len(drift)}")
    finally:
        session.close()
