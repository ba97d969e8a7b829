"""
Appointments Worker - REST integration with the appointments backend

Provides:
- Appointment listing, deletion and update
- Doctor lookups
- Tolerant decoding of mutation replies
"""

from src.workers.appointments_worker.appointments_client import (
    AppointmentsAPIError,
    AppointmentsClient,
)
from src.workers.appointments_worker.response_decoder import (
    MutationReply,
    StructuredReply,
    TextReply,
    decode_mutation_response,
)

__all__ = [
    "AppointmentsAPIError",
    "AppointmentsClient",
    "MutationReply",
    "StructuredReply",
    "TextReply",
    "decode_mutation_response",
]
