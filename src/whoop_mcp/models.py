"""
Data classes shared by the aggregation and insight code.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class DailyRecord:
    """
    Metrics for one day. Every metric is None when the day had no data for it.
    """

    date: str
    recovery_score: Optional[float] = None
    strain: Optional[float] = None
    sleep_hours: Optional[float] = None
    calories: Optional[float] = None
    hrv: Optional[float] = None
    resting_heart_rate: Optional[float] = None

    @classmethod
    def empty(cls, date: str) -> "DailyRecord":
        return cls(date=date)

    def has_data(self) -> bool:
        return any(
            value is not None
            for value in (
                self.recovery_score,
                self.strain,
                self.sleep_hours,
                self.calories,
                self.hrv,
                self.resting_heart_rate,
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "recoveryScore": self.recovery_score,
            "strain": self.strain,
            "sleepHours": self.sleep_hours,
            "calories": self.calories,
            "hrv": self.hrv,
            "restingHeartRate": self.resting_heart_rate,
        }


@dataclass(frozen=True)
class WindowStats:
    avg_recovery: Optional[int] = None
    avg_strain: Optional[float] = None
    avg_sleep: Optional[float] = None
    avg_hrv: Optional[int] = None
    avg_rhr: Optional[int] = None
    days_above_threshold: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "avgRecovery": self.avg_recovery,
            "avgStrain": self.avg_strain,
            "avgSleep": self.avg_sleep,
            "avgHrv": self.avg_hrv,
            "avgRhr": self.avg_rhr,
            "daysAboveThreshold": self.days_above_threshold,
        }


@dataclass(frozen=True)
class ChangeSet:
    recovery_change: Optional[int] = None
    strain_change: Optional[int] = None
    sleep_change: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recoveryChange": self.recovery_change,
            "strainChange": self.strain_change,
            "sleepChange": self.sleep_change,
        }


@dataclass(frozen=True)
class DayValue:
    date: str
    value: float


@dataclass(frozen=True)
class StrainRecoveryBalance:
    ratio: Optional[float] = None
    status: Optional[str] = None  # overreaching / undertrained / balanced

    def to_dict(self) -> Dict[str, Any]:
        return {"ratio": self.ratio, "status": self.status}


@dataclass(frozen=True)
class RecoveryDistribution:
    green: int = 0
    yellow: int = 0
    red: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "greenRecoveryDays": self.green,
            "yellowRecoveryDays": self.yellow,
            "redRecoveryDays": self.red,
        }


@dataclass(frozen=True)
class WeekdayPattern:
    best_day: Optional[str] = None
    worst_day: Optional[str] = None
    avg_by_day: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bestRecoveryDay": self.best_day,
            "worstRecoveryDay": self.worst_day,
            "avgByDay": dict(self.avg_by_day),
        }


@dataclass
class Findings:
    """Insights and recommendations produced by the insight rules."""

    insights: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
