"""
Port (interface) for recording predictions handed out to users.
"""

from abc import ABC, abstractmethod

from src.domain.entities.prediction import Prediction


class IPredictionStore(ABC):
    @abstractmethod
    def save(self, user_id: str, prediction: Prediction) -> None: ...
