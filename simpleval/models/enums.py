"""Valores enumerados dos cadastros"""
from enum import Enum


class Region(str, Enum):
    AMERICAS = "Americas"
    EMEA = "EMEA"
    PACIFIC = "Pacific"
    CHINA = "China"


class RecordStatus(str, Enum):
    """Status de time e jogador"""
    ACTIVE = "Active"
    ARCHIVED = "Archived"


class PlayerRole(str, Enum):
    DUELIST = "Duelist"
    INITIATOR = "Initiator"
    CONTROLLER = "Controller"
    SENTINEL = "Sentinel"
    FLEX = "Flex"
