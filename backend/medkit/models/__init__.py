from .kits import Kit, KIT_STATUS_AVAILABLE, KIT_STATUS_SOLD
from .orders import (
    CodOrder,
    ReturnTicket,
    COD_STATUS_AWAITING_CONFIRMATION,
    COD_STATUS_CONFIRMED,
    COD_STATUS_CANCELLED,
    TICKET_TYPE_REFUND,
    TICKET_TYPE_REPLACEMENT,
    TICKET_STATUS_AWAITING_RETURN,
    TICKET_STATUS_RETURN_RECEIVED,
    TICKET_STATUS_REFUND_INITIATED,
)
from .auth import User

__all__ = [
    'Kit', 'KIT_STATUS_AVAILABLE', 'KIT_STATUS_SOLD',
    'CodOrder', 'ReturnTicket',
    'COD_STATUS_AWAITING_CONFIRMATION', 'COD_STATUS_CONFIRMED', 'COD_STATUS_CANCELLED',
    'TICKET_TYPE_REFUND', 'TICKET_TYPE_REPLACEMENT',
    'TICKET_STATUS_AWAITING_RETURN', 'TICKET_STATUS_RETURN_RECEIVED', 'TICKET_STATUS_REFUND_INITIATED',
    'User',
]
