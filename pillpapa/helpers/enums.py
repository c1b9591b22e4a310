import enum


class MedicineIcon(enum.Enum):
    PILL = 'pill'
    TABLET = 'tablet'
    CAPSULE = 'capsule'
    LIQUID = 'liquid'
    INHALER = 'inhaler'

class AdherenceStatus(enum.Enum):
    TAKEN = 'taken'
    SKIPPED = 'skipped'

class ChatSender(enum.Enum):
    USER = 'user'
    AI = 'ai'
