"""Default facet catalog.

Facets for a mentoring programme: core identity and contact facets, then
role facets for mentors (tutor mission) and learners (student mission).
"""

from facetgraph.facets.enums import FacetKind
from facetgraph.facets.models import FacetDefinition
from facetgraph.facets.registry import FacetRegistry

STEPS = tuple(str(n) for n in range(1, 13))
TOPICS = ("math", "science", "writing", "languages", "test-prep", "music", "coding")

DEFAULT_FACETS: tuple[FacetDefinition, ...] = (
    FacetDefinition(
        id="location",
        kind=FacetKind.TEXT_LOCATION,
        required=True,
        description="Where the member lives",
    ),
    FacetDefinition(
        id="gender",
        kind=FacetKind.ENUM,
        required=True,
        allowed_values=("female", "male", "non-binary", "prefer-not-to-say"),
        aliases={
            "woman": "female",
            "f": "female",
            "man": "male",
            "m": "male",
            "nonbinary": "non-binary",
            "enby": "non-binary",
            "rather not say": "prefer-not-to-say",
        },
        description="Gender identity",
    ),
    FacetDefinition(
        id="commsPref",
        kind=FacetKind.MULTI_ENUM,
        required=True,
        allowed_values=("video", "text", "voice", "in-person"),
        aliases={
            "chat": "text",
            "texting": "text",
            "messaging": "text",
            "phone": "voice",
            "call": "voice",
            "calls": "voice",
            "face to face": "in-person",
            "video call": "video",
            "video calls": "video",
        },
        description="Preferred ways to communicate",
    ),
    FacetDefinition(
        id="languages",
        kind=FacetKind.MULTI_ENUM,
        allowed_values=(
            "english", "spanish", "french", "german",
            "portuguese", "mandarin", "arabic", "hindi",
        ),
        description="Languages spoken",
    ),
    FacetDefinition(
        id="step",
        kind=FacetKind.ENUM,
        required=True,
        allowed_values=STEPS,
        aliases={f"step {n}": n for n in STEPS},
        description="Current step in the program",
    ),
    FacetDefinition(
        id="budget",
        kind=FacetKind.ORDERED_BAND,
        required=True,
        allowed_values=("$", "$$", "$$$", "$$$$"),
        band_bounds=(30, 60, 100),
        description="Budget per session in USD",
    ),
    FacetDefinition(
        id="stepsTaught",
        kind=FacetKind.MULTI_ENUM,
        required=True,
        allowed_values=STEPS,
        aliases={f"step {n}": n for n in STEPS},
        depends_on=("step",),
        description="Program steps the mentor can guide others through",
    ),
    FacetDefinition(
        id="specialties",
        kind=FacetKind.MULTI_ENUM,
        required=True,
        allowed_values=TOPICS,
        aliases={"programming": "coding", "maths": "math", "sat": "test-prep"},
        description="Subjects the mentor teaches",
    ),
    FacetDefinition(
        id="learningGoals",
        kind=FacetKind.MULTI_ENUM,
        required=True,
        allowed_values=TOPICS,
        aliases={"programming": "coding", "maths": "math", "sat": "test-prep"},
        description="Subjects the learner wants help with",
    ),
    FacetDefinition(
        id="availability",
        kind=FacetKind.MULTI_ENUM,
        allowed_values=(
            "weekday-mornings", "weekday-afternoons", "weekday-evenings", "weekends",
        ),
        aliases={
            "mornings": "weekday-mornings",
            "afternoons": "weekday-afternoons",
            "evenings": "weekday-evenings",
            "weekend": "weekends",
        },
        description="When sessions can happen",
    ),
    FacetDefinition(
        id="sessionLength",
        kind=FacetKind.ORDERED_BAND,
        allowed_values=("short", "standard", "long", "extended"),
        band_bounds=(30, 60, 90),
        depends_on=("availability",),
        description="Preferred session length in minutes",
    ),
    FacetDefinition(
        id="genderPreference",
        kind=FacetKind.ENUM,
        allowed_values=("female", "male", "no-preference"),
        aliases={"any": "no-preference", "either": "no-preference", "none": "no-preference"},
        depends_on=("gender",),
        description="Preferred gender of the match",
    ),
)


def default_facet_registry() -> FacetRegistry:
    """Build the registry for the default catalog."""
    return FacetRegistry(DEFAULT_FACETS)
