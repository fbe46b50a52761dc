"""Luna — personal menstrual cycle tracker."""

__version__ = "0.1.0"
