"""
Articulation — Data Models

Dataclasses for every piece of data flowing through the system.
Analysis results are ephemeral; CommunicationScore, UserProgress and
ExerciseAttempt are persisted through the key-value store as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Union

from .scoring import round_half_up


SUBSCORES: tuple[str, ...] = ("fluency", "clarity", "precision", "confidence", "impact")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """ISO string (or datetime) → timezone-aware datetime. Naive values are UTC."""
    ts = value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def parse_date_key(value: Any) -> Optional[str]:
    """Validate a stored "YYYY-MM-DD" day. Raises ValueError when malformed."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Invalid practice date: {value!r}")
    return date.fromisoformat(value).isoformat()


# ---------------------------------------------------------------------------
# Filler analysis
# ---------------------------------------------------------------------------

@dataclass
class PhraseMatch:
    """One lexicon hit: the matched text as written, and where it sits."""
    word: str
    category: str
    position: int
    length: int

    @property
    def end(self) -> int:
        return self.position + self.length



@dataclass
class FillerPosition:
    word: str
    position: int


@dataclass
class DistributionAnalysis:
    """Filler counts in each third of the transcript (by character offset)."""
    beginning: int = 0
    middle: int = 0
    end: int = 0

    @property
    def total(self) -> int:
        return self.beginning + self.middle + self.end


@dataclass
class FillerAnalysisResult:
    total_filler_words: int = 0
    fillers_per_minute: float = 0.0
    category_counts: Dict[str, int] = field(default_factory=dict)
    specific_filler_counts: Dict[str, int] = field(default_factory=dict)
    filler_positions: List[FillerPosition] = field(default_factory=list)
    distribution_analysis: DistributionAnalysis = field(default_factory=DistributionAnalysis)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Structural analysis
# ---------------------------------------------------------------------------

@dataclass
class StructuralElement:
    phrase: str
    position: int
    category: str       # "position" | "supporting"


@dataclass
class StructuralAnalysisResult:
    position_statements: List[StructuralElement] = field(default_factory=list)
    supporting_phrases: List[StructuralElement] = field(default_factory=list)
    all_elements: List[StructuralElement] = field(default_factory=list)
    position_count: int = 0
    supporting_count: int = 0
    total_structural_elements: int = 0
    elements_per_minute: float = 0.0
    insight: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Speech diagnostics
# ---------------------------------------------------------------------------

@dataclass
class SpeechMetricBreakdown:
    score: int = 0
    signals: Dict[str, float] = field(default_factory=dict)
    notes: List[str] = field(default_factory=list)


@dataclass
class SpeechDiagnosticsResult:
    fluency: SpeechMetricBreakdown
    clarity: SpeechMetricBreakdown
    pace: SpeechMetricBreakdown
    precision: SpeechMetricBreakdown
    confidence: SpeechMetricBreakdown
    impact: SpeechMetricBreakdown
    # Exactly the five public dimensions (pace is folded into clarity)
    subscores: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SessionReport:
    """Everything the analyzers produce for one transcript."""
    fillers: FillerAnalysisResult
    structure: StructuralAnalysisResult
    diagnostics: SpeechDiagnosticsResult

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Subscore values: measured or not yet measured
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Measured:
    value: int


@dataclass(frozen=True)
class Unmeasured:
    pass


UNMEASURED = Unmeasured()

Subscore = Union[Measured, Unmeasured]


def subscore_from_raw(raw: Any) -> Subscore:
    if raw is None:
        return UNMEASURED
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"Invalid subscore value: {raw!r}")
    return Measured(round_half_up(raw))


def subscore_to_raw(value: Subscore) -> Optional[int]:
    if isinstance(value, Measured):
        return value.value
    return None


# ---------------------------------------------------------------------------
# Persisted records
# ---------------------------------------------------------------------------

@dataclass
class CommunicationScore:
    overall: int = 0
    fluency: Subscore = UNMEASURED
    clarity: Subscore = UNMEASURED
    precision: Subscore = UNMEASURED
    confidence: Subscore = UNMEASURED
    impact: Subscore = UNMEASURED
    last_updated: datetime = field(default_factory=utc_now)

    def get(self, name: str) -> Subscore:
        if name not in SUBSCORES:
            raise KeyError(name)
        return getattr(self, name)

    def set(self, name: str, value: Subscore) -> None:
        if name not in SUBSCORES:
            raise KeyError(name)
        setattr(self, name, value)

    def measured_values(self) -> Dict[str, int]:
        values: Dict[str, int] = {}
        for name in SUBSCORES:
            value = self.get(name)
            if isinstance(value, Measured):
                values[name] = value.value
        return values

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"overall": self.overall}
        for name in SUBSCORES:
            d[name] = subscore_to_raw(self.get(name))
        d["last_updated"] = self.last_updated.isoformat()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommunicationScore":
        if not isinstance(data, dict):
            raise ValueError("communication_score is not an object")
        score = cls(
            overall=int(data.get("overall", 0)),
            last_updated=parse_timestamp(data["last_updated"]) if data.get("last_updated") else utc_now(),
        )
        for name in SUBSCORES:
            score.set(name, subscore_from_raw(data.get(name)))
        return score


@dataclass
class ExerciseAttempt:
    """One completed exercise session. Immutable once written."""
    id: str
    exercise_id: str
    score: int
    impacted_scores: Dict[str, int] = field(default_factory=dict)
    xp_earned: int = 0
    duration: float = 0.0           # seconds
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["timestamp"] = self.timestamp.isoformat()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExerciseAttempt":
        impacted = data.get("impacted_scores") or {}
        if not isinstance(impacted, dict):
            raise ValueError("impacted_scores must be a mapping")
        return cls(
            id=str(data["id"]),
            exercise_id=str(data["exercise_id"]),
            score=int(data["score"]),
            impacted_scores={k: int(v) for k, v in impacted.items() if k in SUBSCORES},
            xp_earned=int(data.get("xp_earned", 0)),
            duration=float(data.get("duration", 0)),
            timestamp=parse_timestamp(data["timestamp"]),
        )


@dataclass(frozen=True)
class Archetype:
    id: str
    name: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UserProgress:
    user_id: str
    communication_score: CommunicationScore = field(default_factory=CommunicationScore)
    archetype: Optional[Archetype] = None
    current_streak: int = 0
    longest_streak: int = 0
    last_practice_date: Optional[str] = None    # "YYYY-MM-DD" (UTC)
    total_xp: int = 0
    total_sessions: int = 0
    total_practice_time: float = 0.0            # seconds
    achievements: List[str] = field(default_factory=list)

    def has_achievement(self, achievement_id: str) -> bool:
        return achievement_id in self.achievements

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "communication_score": self.communication_score.to_dict(),
            "archetype": self.archetype.to_dict() if self.archetype else None,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_practice_date": self.last_practice_date,
            "total_xp": self.total_xp,
            "total_sessions": self.total_sessions,
            "total_practice_time": self.total_practice_time,
            "achievements": list(self.achievements),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], user_id: str) -> "UserProgress":
        archetype = data.get("archetype")
        achievements = data.get("achievements")
        return cls(
            user_id=user_id,
            communication_score=CommunicationScore.from_dict(data["communication_score"]),
            archetype=Archetype(**archetype) if isinstance(archetype, dict) else None,
            current_streak=int(data.get("current_streak", 0)),
            longest_streak=int(data.get("longest_streak", 0)),
            last_practice_date=parse_date_key(data.get("last_practice_date")),
            total_xp=int(data.get("total_xp", 0)),
            total_sessions=int(data.get("total_sessions", 0)),
            total_practice_time=float(data.get("total_practice_time", 0)),
            achievements=[str(a) for a in achievements] if isinstance(achievements, list) else [],
        )


# ---------------------------------------------------------------------------
# Static reference data
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    name: str
    description: str
    icon: str
    requirement: str
    xp_reward: int
    # "streak" | "sessions" | "score" | "improvement"
    # | "exercise-mastery" | "perfect" | "category-mastery"
    kind: str
    target: Optional[int] = None
    subscore: Optional[str] = None
    exercise_id: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ExerciseConfig:
    id: str
    name: str
    description: str
    short_description: str
    estimated_time: int             # seconds
    type: str                       # "verbal" | "written"
    category: str
    tier: str                       # "foundation" | "adaptive"
    icon: str
    impacts_scores: tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

@dataclass
class StreakStatus:
    current_streak: int = 0
    longest_streak: int = 0
    has_practiced_today: bool = False
    is_at_risk: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AchievementProgress:
    current: int
    target: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
