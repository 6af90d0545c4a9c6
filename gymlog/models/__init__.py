from .exercise import Exercise, MuscleGroup, DEFAULT_EXERCISES
from .workout import Workout, WorkoutExercise, RecentWorkout
from .workout_set import WorkoutSet
from .template import WorkoutTemplate, TemplateExercise
from .user_profile import UserProfile, Unit
from .progress import ExerciseProgress, WorkoutSummary

__all__ = [
    "Exercise",
    "MuscleGroup",
    "DEFAULT_EXERCISES",
    "Workout",
    "WorkoutExercise",
    "RecentWorkout",
    "WorkoutSet",
    "WorkoutTemplate",
    "TemplateExercise",
    "UserProfile",
    "Unit",
    "ExerciseProgress",
    "WorkoutSummary",
]
