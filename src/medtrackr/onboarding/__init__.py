"""
MedTrackr Onboarding Wizard

Role-branching onboarding flow that turns sign-up credentials plus a series
of answers into a persisted user profile.
"""

from medtrackr.onboarding.controller import NavigationResult, WizardController, WizardPhase
from medtrackr.onboarding.runner import OnboardingRunner, onboard_from_template
from medtrackr.onboarding.ui import WizardUI

__all__ = [
    "NavigationResult",
    "OnboardingRunner",
    "WizardController",
    "WizardPhase",
    "WizardUI",
    "onboard_from_template",
]
