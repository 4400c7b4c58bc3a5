"""Exercise catalog and random selection."""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Tuple

from fitdesk.core.constants import CATEGORIES
from fitdesk.core.models import Exercise


class ExerciseNotFoundError(LookupError):
    """Raised when an exercise id is not in the catalog."""


class EmptyCategoryError(LookupError):
    """Raised when random selection is requested from a category with no exercises."""


_GIF = "https://media.giphy.com/media/{}/giphy.gif"

EXERCISES: Tuple[Exercise, ...] = (
    # Upper body
    Exercise(
        id="pushups",
        name="Push-ups",
        category="upper",
        type="reps",
        amount=15,
        description="Classic push-ups with hands at shoulder height",
        tips=(
            "Keep your body straight like a plank",
            "Lower until your chest almost touches the floor",
            "If it is too hard, do them on your knees",
        ),
        gif=_GIF.format("kYvaNlsFBgq3xZ8fRn"),
    ),
    Exercise(
        id="incline-pushups",
        name="Incline Push-ups",
        category="upper",
        type="reps",
        amount=15,
        description="Push-ups with your hands on the desk or a chair",
        tips=(
            "Great for beginners",
            "The more upright, the easier",
            "Keep your elbows close to your body",
        ),
        gif=_GIF.format("2yuPBGrg5DagENk59X"),
    ),
    Exercise(
        id="tricep-dips",
        name="Tricep Dips",
        category="upper",
        type="reps",
        amount=12,
        description="Dips using a chair or desk for support",
        tips=(
            "Keep your back close to the chair",
            "Lower until your elbows reach 90 degrees",
            "Do not let your shoulders creep up to your ears",
        ),
        gif=_GIF.format("wKdb2xwADyl3hQZmZh"),
    ),
    Exercise(
        id="diamond-pushups",
        name="Diamond Push-ups",
        category="upper",
        type="reps",
        amount=10,
        description="Push-ups with your hands together forming a diamond",
        tips=(
            "Touch thumbs and index fingers together",
            "Works the triceps harder",
            "Keep your elbows tucked in",
        ),
        gif=_GIF.format("JZPaw2Y2oENHcZrHja"),
    ),
    Exercise(
        id="wide-pushups",
        name="Wide Push-ups",
        category="upper",
        type="reps",
        amount=12,
        description="Push-ups with hands wider than your shoulders",
        tips=(
            "Works the chest harder",
            "Keep your core tight",
            "Do not let your hips sag",
        ),
        gif=_GIF.format("7YCC7PTNX2TOhJQ6aW"),
    ),
    # Core
    Exercise(
        id="plank",
        name="Plank",
        category="core",
        type="time",
        amount=45,
        description="Hold the plank position resting on your forearms",
        tips=(
            "Body in a straight line from head to heels",
            "Squeeze glutes and abs",
            "Do not let your hips drop",
        ),
        gif=_GIF.format("ZcteOOkovIh9HaVFjT"),
    ),
    Exercise(
        id="crunches",
        name="Crunches",
        category="core",
        type="reps",
        amount=20,
        description="Classic crunches lying on your back",
        tips=(
            "Do not pull your neck with your hands",
            "Breathe out on the way up",
            "Controlled movement, no momentum",
        ),
        gif=_GIF.format("d4bnhtIfWQQt8qv6"),
    ),
    Exercise(
        id="mountain-climbers",
        name="Mountain Climbers",
        category="core",
        type="time",
        amount=30,
        description="From a plank, alternate driving your knees to your chest",
        tips=("Keep your hips low", "Steady rhythm", "Core engaged at all times"),
        gif=_GIF.format("VzlPEkuoqlgjehxvxk"),
    ),
    Exercise(
        id="side-plank",
        name="Side Plank",
        category="core",
        type="time",
        amount=30,
        description="Plank on your side resting on one forearm",
        tips=(
            "Hips high, do not let them drop",
            "Do both sides",
            "Rest the lower knee on the floor if it is too hard",
        ),
        gif=_GIF.format("jpL8gAOyUasNPHHASL"),
    ),
    Exercise(
        id="leg-raises",
        name="Leg Raises",
        category="core",
        type="reps",
        amount=15,
        description="Lying on your back, raise both legs together",
        tips=(
            "Keep your lower back pressed to the floor",
            "Lower slowly and under control",
            "You can bend your knees slightly",
        ),
        gif=_GIF.format("mVpOJcNBGPwzlfkTxJ"),
    ),
    Exercise(
        id="russian-twists",
        name="Russian Twists",
        category="core",
        type="reps",
        amount=20,
        description="Seated with feet raised, rotate your torso side to side",
        tips=(
            "Keep your back straight",
            "Feet stay off the floor",
            "Rotate from the core, not just the arms",
        ),
        gif=_GIF.format("cpKD9u3S25xYL8tcbr"),
    ),
    # Lower body
    Exercise(
        id="squats",
        name="Squats",
        category="lower",
        type="reps",
        amount=20,
        description="Bodyweight squats",
        tips=(
            "Knees in line with your feet",
            "Lower until your thighs are parallel to the floor",
            "Keep your chest up",
        ),
        gif=_GIF.format("1qfKN8Dt0CRdCRxz9q"),
    ),
    Exercise(
        id="lunges",
        name="Lunges",
        category="lower",
        type="reps",
        amount=12,
        description="Lunges alternating legs",
        tips=(
            "Back knee almost touches the floor",
            "Front knee stays behind your toes",
            "Keep your torso upright",
        ),
        gif=_GIF.format("ddR8T7OIILMK8H2YEh"),
    ),
    Exercise(
        id="wall-sit",
        name="Wall Sit",
        category="lower",
        type="time",
        amount=45,
        description="Hold a squat position leaning against the wall",
        tips=(
            "Thighs parallel to the floor",
            "Back fully against the wall",
            "Breathe steadily",
        ),
        gif=_GIF.format("NaKGjtR1bMgVTH5Rds"),
    ),
    Exercise(
        id="calf-raises",
        name="Calf Raises",
        category="lower",
        type="reps",
        amount=20,
        description="Rise onto your toes and lower slowly",
        tips=(
            "Go as high as you can",
            "Lower under control",
            "Use a step for a bigger range of motion",
        ),
        gif=_GIF.format("2wXXVCek2NfkneGqz9"),
    ),
    Exercise(
        id="glute-bridges",
        name="Glute Bridges",
        category="lower",
        type="reps",
        amount=15,
        description="Lying on your back, lift your hips by squeezing your glutes",
        tips=(
            "Squeeze your glutes at the top",
            "Hold for 2 seconds at the top",
            "Do not arch your lower back",
        ),
        gif=_GIF.format("SJWtWnRFsTiNVSECVP"),
    ),
    Exercise(
        id="jump-squats",
        name="Jump Squats",
        category="lower",
        type="reps",
        amount=12,
        description="A squat followed by an explosive jump",
        tips=(
            "Land softly with bent knees",
            "Use your arms to drive up",
            "Continuous, fluid movement",
        ),
        gif=_GIF.format("WtnkfTBF2D2OsODSxf"),
    ),
    # Cardio
    Exercise(
        id="jumping-jacks",
        name="Jumping Jacks",
        category="cardio",
        type="time",
        amount=45,
        description="Jump while opening and closing your legs and arms",
        tips=(
            "Keep a steady pace",
            "Land softly",
            "Arms fully extended overhead",
        ),
        gif=_GIF.format("RgtuKqJ8rPII4qdRjp"),
    ),
    Exercise(
        id="high-knees",
        name="High Knees",
        category="cardio",
        type="time",
        amount=30,
        description="Run in place bringing your knees up to your chest",
        tips=("Knees up to hip height", "Use your arms", "Keep your core tight"),
        gif=_GIF.format("lboo9np8SJ58sSlGg8"),
    ),
    Exercise(
        id="butt-kicks",
        name="Butt Kicks",
        category="cardio",
        type="time",
        amount=30,
        description="Run in place bringing your heels to your glutes",
        tips=(
            "Heels touch your glutes",
            "Keep your torso upright",
            "Quick, steady rhythm",
        ),
        gif=_GIF.format("l2RnAY30gjJ6ukKJy"),
    ),
    # Full body
    Exercise(
        id="burpees",
        name="Burpees",
        category="full-body",
        type="reps",
        amount=8,
        description="Squat, plank, push-up, jump: the complete exercise",
        tips=(
            "Fluid movement without pauses",
            "Drop the push-up if it is too hard",
            "Land softly from the jump",
        ),
        gif=_GIF.format("KxuGSIZU1QZfRiRx4h"),
    ),
    Exercise(
        id="burpees-no-pushup",
        name="Burpees Without Push-up",
        category="full-body",
        type="reps",
        amount=10,
        description="An easier version: squat, plank, jump",
        tips=(
            "Ideal for getting started",
            "Keep the rhythm",
            "Jump with your arms up",
        ),
        gif=_GIF.format("3ohzdHUsLjzIEkK56E"),
    ),
    Exercise(
        id="squat-to-press",
        name="Squat to Press",
        category="full-body",
        type="reps",
        amount=15,
        description="Squat and extend your arms overhead as you stand up",
        tips=(
            "Explosive on the way up",
            "Arms fully extended at the top",
            "Add weight if you have something at hand",
        ),
        gif=_GIF.format("1jWIiKGHlkbtULERvB"),
    ),
    Exercise(
        id="inchworms",
        name="Inchworms",
        category="full-body",
        type="reps",
        amount=8,
        description="From standing, walk your hands out to a plank and back",
        tips=(
            "Legs as straight as possible",
            "Add a push-up in the plank for more intensity",
            "Controlled movement",
        ),
        gif=_GIF.format("9cRdH6mSSANlnPtfYD"),
    ),
)

_BY_ID: Dict[str, Exercise] = {exercise.id: exercise for exercise in EXERCISES}


def parse_category(value: str) -> str:
    """Normalize a user-supplied category name."""
    normalized = value.strip().lower().replace("_", "-").replace(" ", "-")
    if normalized == "fullbody":
        normalized = "full-body"
    if normalized not in CATEGORIES:
        raise ValueError(f"Unknown category '{value}'. Expected one of: {', '.join(CATEGORIES)}")
    return normalized


def get_exercise(exercise_id: str) -> Exercise:
    try:
        return _BY_ID[exercise_id]
    except KeyError:
        raise ExerciseNotFoundError(f"No exercise with id '{exercise_id}'") from None


def exercises_by_category(category: str, catalog: Tuple[Exercise, ...] = EXERCISES) -> List[Exercise]:
    return [exercise for exercise in catalog if exercise.category == category]


def pick_random(
    rng: Optional[random.Random] = None,
    catalog: Tuple[Exercise, ...] = EXERCISES,
) -> Exercise:
    """Uniformly pick any exercise from the catalog."""
    chooser = rng or random
    return chooser.choice(catalog)


def pick_random_by_category(
    category: str,
    rng: Optional[random.Random] = None,
    catalog: Tuple[Exercise, ...] = EXERCISES,
) -> Exercise:
    """Uniformly pick an exercise from one category.

    Raises EmptyCategoryError when the category has no entries.
    """
    candidates = exercises_by_category(category, catalog)
    if not candidates:
        raise EmptyCategoryError(f"No exercises available in category '{category}'")
    chooser = rng or random
    return chooser.choice(candidates)
