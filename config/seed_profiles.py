"""
Seed Roster and Synthetic Event Parameters - CENTRALIZED

Mock athletes and the distribution parameters used to generate
demonstration jump/cut events for the scout dashboard.

IMPORTANT: The seed script and the generator both import from here.
Do NOT duplicate these values elsewhere.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple


# Fixed enumerations shared by the generator and the filter options
POSITIONS: Tuple[str, ...] = ('Forward', 'Midfielder', 'Defender', 'Goalkeeper')
MOVEMENT_TYPES: Tuple[str, ...] = ('CUTTING', 'LANDING', 'UNKNOWN')
RISK_LEVELS: Tuple[str, ...] = ('HIGH', 'LOW')


# Coaching tips keyed by risk level (4 each)
RISK_TIPS: Dict[str, List[str]] = {
    'LOW': [
        'Great landing mechanics!',
        'Excellent knee alignment.',
        'Good cut technique.',
        'Solid deceleration.',
    ],
    'HIGH': [
        'Knee valgus detected - focus on hip abductor strength.',
        'High impact load - check landing mechanics.',
        'Excessive trunk lean observed.',
        'Reduce rotational stress on cuts.',
    ],
}


@dataclass(frozen=True)
class GeneratorParams:
    """Distribution parameters for synthetic event generation"""

    # Risk coin-flip
    low_skill_threshold: int = 70
    high_risk_probability_low_skill: float = 0.40
    high_risk_probability: float = 0.15

    # Efficiency score jitter around the athlete baseline, [min, max)
    score_jitter: Tuple[int, int] = (-15, 15)
    score_bounds: Tuple[int, int] = (0, 100)

    # Valgus angle ranges (degrees), [lo, hi)
    valgus_low_risk: Tuple[float, float] = (3.0, 12.0)
    valgus_high_risk: Tuple[float, float] = (12.0, 22.0)

    # Peak accelerations (G) and rotational velocity (rad/s), [lo, hi)
    peak_vertical_g: Tuple[float, float] = (2.5, 6.5)
    peak_lateral_g: Tuple[float, float] = (0.8, 3.5)
    peak_rotational_vel: Tuple[float, float] = (1.0, 4.5)

    # Cosmetic spread fields
    vertical_std_dev: Tuple[float, float] = (0.05, 0.3)
    lateral_std_dev: Tuple[float, float] = (0.04, 0.2)

    # Minutes between consecutive events, [lo, hi)
    gap_minutes: Tuple[float, float] = (5.0, 120.0)

    # Events per athlete when the seed script draws a count, [lo, hi)
    event_count: Tuple[int, int] = (25, 50)

    # Athlete lastActive offset in minutes, [lo, hi)
    last_active_minutes: Tuple[int, int] = (10, 300)


DEFAULT_PARAMS = GeneratorParams()


# Mock roster written to the athletes collection
SEED_ATHLETES: List[dict] = [
    {'id': 'demo-user-001', 'name': 'Rahul Sharma', 'age': 16, 'position': 'Midfielder',
     'club': 'United Youth Academy', 'country': 'India', 'efficiencyScore': 87, 'totalJumps': 42,
     'avgValgusAngle': 8.4, 'avgPeakVerticalG': 4.2, 'avgPeakLateralG': 2.1, 'avgRotationalVel': 2.3},
    {'id': 'player-002', 'name': 'Arjun Mehta', 'age': 15, 'position': 'Forward',
     'club': 'Mumbai FC Youth', 'country': 'India', 'efficiencyScore': 92, 'totalJumps': 38,
     'avgValgusAngle': 6.2, 'avgPeakVerticalG': 4.8, 'avgPeakLateralG': 1.9, 'avgRotationalVel': 2.1},
    {'id': 'player-003', 'name': 'Lucas Silva', 'age': 17, 'position': 'Defender',
     'club': 'São Paulo Academy', 'country': 'Brazil', 'efficiencyScore': 74, 'totalJumps': 55,
     'avgValgusAngle': 12.1, 'avgPeakVerticalG': 3.9, 'avgPeakLateralG': 2.4, 'avgRotationalVel': 2.7},
    {'id': 'player-004', 'name': 'Emma Chen', 'age': 14, 'position': 'Midfielder',
     'club': 'Beijing Sports School', 'country': 'China', 'efficiencyScore': 95, 'totalJumps': 67,
     'avgValgusAngle': 5.8, 'avgPeakVerticalG': 3.7, 'avgPeakLateralG': 1.7, 'avgRotationalVel': 1.9},
    {'id': 'player-005', 'name': 'Carlos Mendez', 'age': 18, 'position': 'Forward',
     'club': 'Barcelona B', 'country': 'Spain', 'efficiencyScore': 81, 'totalJumps': 91,
     'avgValgusAngle': 9.3, 'avgPeakVerticalG': 5.1, 'avgPeakLateralG': 2.3, 'avgRotationalVel': 2.5},
    {'id': 'player-006', 'name': 'Ahmed Al-Rashid', 'age': 16, 'position': 'Goalkeeper',
     'club': 'Dubai Sports City', 'country': 'UAE', 'efficiencyScore': 68, 'totalJumps': 29,
     'avgValgusAngle': 14.2, 'avgPeakVerticalG': 3.2, 'avgPeakLateralG': 1.5, 'avgRotationalVel': 1.8},
    {'id': 'player-007', 'name': 'Priya Nair', 'age': 15, 'position': 'Defender',
     'club': 'Kerala Blasters Youth', 'country': 'India', 'efficiencyScore': 79, 'totalJumps': 48,
     'avgValgusAngle': 10.7, 'avgPeakVerticalG': 3.8, 'avgPeakLateralG': 2.0, 'avgRotationalVel': 2.2},
    {'id': 'player-008', 'name': 'Kenji Tanaka', 'age': 17, 'position': 'Midfielder',
     'club': 'Gamba Osaka Youth', 'country': 'Japan', 'efficiencyScore': 88, 'totalJumps': 73,
     'avgValgusAngle': 7.9, 'avgPeakVerticalG': 4.4, 'avgPeakLateralG': 2.2, 'avgRotationalVel': 2.4},
    {'id': 'player-009', 'name': 'Fatima Ouedraogo', 'age': 16, 'position': 'Forward',
     'club': 'ASEC Mimosas', 'country': 'Ghana', 'efficiencyScore': 55, 'totalJumps': 22,
     'avgValgusAngle': 17.3, 'avgPeakVerticalG': 5.4, 'avgPeakLateralG': 2.9, 'avgRotationalVel': 3.1},
    {'id': 'player-010', 'name': 'Marcus Johnson', 'age': 14, 'position': 'Midfielder',
     'club': 'Manchester City EDS', 'country': 'England', 'efficiencyScore': 91, 'totalJumps': 58,
     'avgValgusAngle': 6.5, 'avgPeakVerticalG': 4.0, 'avgPeakLateralG': 1.8, 'avgRotationalVel': 2.0},
]
