from typing import Literal

# primitive tags a player can hold
PrimitivePosition = Literal["C", "1B", "2B", "SS", "3B", "OF", "SP", "RP", "UTIL"]
# anything a roster slot can ask for, composites included
Position = Literal["C", "1B", "2B", "SS", "3B", "OF", "SP", "RP", "UTIL", "CI", "MI", "BEN"]

DraftStatus = Literal["setup", "in_progress", "completed"]
