from .event import Event
from .participant import Participant
from .payment import Payment
from .registration import RegistrationAnswer, RegistrationQuestion

__all__ = [
    "Event",
    "Participant",
    "Payment",
    "RegistrationAnswer",
    "RegistrationQuestion",
]
