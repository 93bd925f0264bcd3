# backend/pawfund/db/models/__init__.py

from pawfund.db.models.user import User
from pawfund.db.models.shelter import Shelter
from pawfund.db.models.donation import Donation

from pawfund.db.models.pet import Pet
from pawfund.db.models.status import Status
from pawfund.db.models.pet_status import PetStatus
