"""Role model for RBAC: the closed role set and its seniority levels."""

import enum
from types import MappingProxyType


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    EXECUTIVE_PRODUCER = "EXECUTIVE_PRODUCER"
    CREATIVE_DIRECTOR = "CREATIVE_DIRECTOR"
    CONCEPT_ARTIST = "CONCEPT_ARTIST"
    ARTIST = "ARTIST"
    WRITER = "WRITER"
    VIEWER = "VIEWER"


# Seniority hint only; module access never derives from these numbers.
ROLE_LEVELS = MappingProxyType({
    Role.ADMIN: 100,
    Role.EXECUTIVE_PRODUCER: 80,
    Role.CREATIVE_DIRECTOR: 70,
    Role.CONCEPT_ARTIST: 35,
    Role.ARTIST: 30,
    Role.WRITER: 30,
    Role.VIEWER: 10,
})

ROLE_LABELS = MappingProxyType({
    Role.ADMIN: "Administrator",
    Role.EXECUTIVE_PRODUCER: "Executive Producer",
    Role.CREATIVE_DIRECTOR: "Creative Director",
    Role.CONCEPT_ARTIST: "Concept Artist",
    Role.ARTIST: "Artist",
    Role.WRITER: "Writer",
    Role.VIEWER: "Viewer",
})
