"""Settings dataclasses for BendRoute."""
from dataclasses import dataclass, field
from typing import Dict, List

HEURISTIC_FORMULAS = (
    "manhattan", "max_dxdy", "euclidean", "euclidean_no_sqr", "diagonal_short_cut"
)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RoutingSettings:
    """Path search settings.

    ``steps``, ``tolerances`` and ``heuristics`` span the parameter lattice
    swept by the path-find enumerator, outermost to innermost.
    """
    steps: List[float] = field(default_factory=lambda: [0.5, 0.2])
    tolerances: List[int] = field(default_factory=lambda: [5])
    heuristics: List[int] = field(default_factory=lambda: [100, 50])
    angles: List[int] = field(default_factory=lambda: [90])
    trace_angle: int = 90
    min_link_length: float = 0.0
    max_link_length: float = 0.0
    heuristic_formula: str = "manhattan"
    punish_change_direction: bool = True
    step_cost: float = 0.01
    change_direction_cost: float = 200.0
    deadline_ms: int = 200000
    max_iterations: int = 20000

    def validate(self) -> List[str]:
        """Return a list of human-readable problems, empty when valid."""
        errors = []
        if not self.steps:
            errors.append("At least one step size is required")
        if any(step <= 0 for step in self.steps):
            errors.append(f"Step sizes must be positive: {self.steps}")
        if not self.tolerances:
            errors.append("At least one tolerance is required")
        if any(t < 0 for t in self.tolerances):
            errors.append(f"Tolerances must be non-negative digit counts: {self.tolerances}")
        if not self.heuristics:
            errors.append("At least one heuristic weight is required")
        if not self.angles:
            errors.append("At least one allowed angle is required")
        if any(a < 0 or a > 180 for a in self.angles):
            errors.append(f"Allowed angles must be within [0, 180]: {self.angles}")
        if self.trace_angle <= 0 or self.trace_angle > 180:
            errors.append(f"Trace angle must be within (0, 180]: {self.trace_angle}")
        if self.min_link_length < 0:
            errors.append("Minimum link length must be non-negative")
        if self.max_link_length < 0:
            errors.append("Maximum link length must be non-negative")
        if self.heuristic_formula not in HEURISTIC_FORMULAS:
            errors.append(f"Unknown heuristic formula: {self.heuristic_formula}")
        if self.deadline_ms <= 0:
            errors.append("Deadline must be positive")
        if self.max_iterations <= 0:
            errors.append("Max iterations must be positive")
        return errors


@dataclass
class ToleranceSettings:
    """Numeric tolerances shared by the geometric solvers."""
    linear_digits: int = 5
    compound_digits: int = 3
    node_compound_digits: int = 2
    angle_degrees: float = 3.0
    plane_tolerance: float = 0.03
    ray_length: float = 10000.0

    def validate(self) -> List[str]:
        errors = []
        if self.linear_digits < 0 or self.compound_digits < 0 or self.node_compound_digits < 0:
            errors.append("Digit counts must be non-negative")
        if not 0 <= self.angle_degrees < 90:
            errors.append(f"Angle tolerance must be within [0, 90): {self.angle_degrees}")
        if self.plane_tolerance < 0:
            errors.append("Plane tolerance must be non-negative")
        if self.ray_length <= 0:
            errors.append("Ray length must be positive")
        return errors


@dataclass
class LoggingSettings:
    """Logging settings."""
    level: str = "INFO"
    format_string: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    console_output: bool = True
    file_output: bool = False
    log_file: str = "logs/bendroute.log"
    max_file_size_mb: int = 10
    backup_count: int = 3
    component_levels: Dict[str, str] = field(default_factory=dict)

    def validate(self) -> List[str]:
        errors = []
        if self.level.upper() not in LOG_LEVELS:
            errors.append(f"Unknown log level: {self.level}")
        for component, level in self.component_levels.items():
            if level.upper() not in LOG_LEVELS:
                errors.append(f"Unknown log level for {component}: {level}")
        if self.max_file_size_mb <= 0:
            errors.append("Log file size must be positive")
        return errors


@dataclass
class ApplicationSettings:
    """Top-level settings container."""
    version: str = "1.0.0"
    config_version: int = 1
    routing: RoutingSettings = field(default_factory=RoutingSettings)
    tolerance: ToleranceSettings = field(default_factory=ToleranceSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def validate(self) -> Dict[str, List[str]]:
        """Validate every settings category."""
        return {
            "routing": self.routing.validate(),
            "tolerance": self.tolerance.validate(),
            "logging": self.logging.validate(),
        }
