"""Closed set of table shapes found on the league site.

Every extractor is keyed by one ``PageShape`` member. The member carries the
heading pattern that introduces its section (if any) and the zero-based ``td``
index of each column the extractor reads. A layout change on the site is a
change to this table, not to the parsers.

    TEAM_AVERAGE    "Average" section of the team statistics page
                    rows:   1 name, 2 legs, 6 average (3-dart display, comma decimal)
                    footer: 6 team average
    SINGLES         "Einzel" section; rows/footer: 1 name, 3 won, 4 lost
    DOUBLES         "Doppel" section; rows/footer: 1 name, 3 won, 4 lost
                    (footer totals count each pair twice)
    ONE_EIGHTY      "180s" section; 1 name, 3 count
    HIGH_FINISH     "High Finish" section; 1 name, 4 finishes ("121, 104")
    SCHEDULE_ROUND  "Runde N - DD.MM.YYYY" sections of the fixtures page; 0 home, 1 away
    RESULT_ROUND    same headings on the results page; 0 home, 1 away,
                    2 home legs, 4 away legs, 5 home sets, 7 away sets (bold)
    CUP_ROUND       "Runde N" sections of the cup page; 0 home, 1 away
    STANDINGS       first div.ranking of the table page;
                    0 position, 1 team, 2 played, 3 wins, 4 draws, 5 losses
    VENUES          teams page; 0 rank, 1 team, 2 club, 3 venue, 4 address, 5 city, 6 phone
    COMPARISON      team results page; 0 round, 2 home, 3 away, 7 home sets, 9 away sets
    REPORT_INDEX    match report index rows (onclick carries id=N); 0 date, 1 home, 2 away
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Pattern

ROUND_HEADING_RE = re.compile(r"Runde (\d+) - (\d{2}\.\d{2}\.\d{4})")
ROUND_ONLY_RE = re.compile(r"Runde (\d+)")


@dataclass(frozen=True, eq=False)
class TableShape:
    heading: Optional[Pattern[str]]
    columns: Mapping[str, int]
    footer: Mapping[str, int] = field(default_factory=dict)

    @property
    def min_columns(self) -> int:
        return max(self.columns.values()) + 1


def _label(text: str) -> Pattern[str]:
    return re.compile(re.escape(text))


class PageShape(Enum):
    TEAM_AVERAGE = TableShape(
        heading=_label("Average"),
        columns={"name": 1, "legs": 2, "average": 6},
        footer={"average": 6},
    )
    SINGLES = TableShape(
        heading=_label("Einzel"),
        columns={"name": 1, "won": 3, "lost": 4},
        footer={"won": 3, "lost": 4},
    )
    DOUBLES = TableShape(
        heading=_label("Doppel"),
        columns={"name": 1, "won": 3, "lost": 4},
        footer={"won": 3, "lost": 4},
    )
    ONE_EIGHTY = TableShape(heading=_label("180s"), columns={"name": 1, "count": 3})
    HIGH_FINISH = TableShape(heading=_label("High Finish"), columns={"name": 1, "finishes": 4})
    SCHEDULE_ROUND = TableShape(heading=ROUND_HEADING_RE, columns={"home": 0, "away": 1})
    RESULT_ROUND = TableShape(
        heading=ROUND_HEADING_RE,
        columns={
            "home": 0,
            "away": 1,
            "home_legs": 2,
            "away_legs": 4,
            "home_sets": 5,
            "away_sets": 7,
        },
    )
    CUP_ROUND = TableShape(heading=ROUND_ONLY_RE, columns={"home": 0, "away": 1})
    STANDINGS = TableShape(
        heading=None,
        columns={"position": 0, "team": 1, "played": 2, "wins": 3, "draws": 4, "losses": 5},
    )
    VENUES = TableShape(
        heading=None,
        columns={
            "rank": 0,
            "team": 1,
            "club": 2,
            "venue": 3,
            "address": 4,
            "city": 5,
            "phone": 6,
        },
    )
    COMPARISON = TableShape(
        heading=None,
        columns={"round": 0, "home": 2, "away": 3, "home_sets": 7, "away_sets": 9},
    )
    REPORT_INDEX = TableShape(heading=None, columns={"date": 0, "home": 1, "away": 2})

    @property
    def heading(self) -> Optional[Pattern[str]]:
        return self.value.heading

    @property
    def columns(self) -> Mapping[str, int]:
        return self.value.columns

    @property
    def footer(self) -> Mapping[str, int]:
        return self.value.footer
