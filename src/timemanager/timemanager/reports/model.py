from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TeamAverage:
    team_id: int
    team_name: str
    avg_hours: float


@dataclass(frozen=True)
class Report:
    team_avg_hours_week: list[TeamAverage] = field(default_factory=list)
    lateness_rate_month: float = 0.0

    def as_dict(self) -> dict:
        return {
            "teamAvgHoursWeek": [
                {"teamId": t.team_id, "teamName": t.team_name, "avgHours": t.avg_hours}
                for t in self.team_avg_hours_week
            ],
            "latenessRateMonth": self.lateness_rate_month,
        }
