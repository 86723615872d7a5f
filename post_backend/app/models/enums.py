"""
Employee position enumeration.

Defines the staff roles working at post offices.
"""

import enum


class EmployeePosition(str, enum.Enum):
    """
    Employee position enumeration.
    
    Positions:
        CLERK: Front-desk staff, credited on parcel handling entries
        MANAGER: Runs a post office
        DRIVER: Moves parcels between post offices
        ACCOUNTANT: Back-office finance
        ADMINISTRATOR: System-level staff
    """
    CLERK = "CLERK"
    MANAGER = "MANAGER"
    DRIVER = "DRIVER"
    ACCOUNTANT = "ACCOUNTANT"
    ADMINISTRATOR = "ADMINISTRATOR"
