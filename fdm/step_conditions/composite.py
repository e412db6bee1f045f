# -*- coding: utf-8 -*-
"""
Ordered collection of step conditions with their merged stopping times.
"""

from typing import Iterable, List

from fdm.step_conditions.american import FdmAmericanStepCondition
from fdm.step_conditions.dividend_handler import FdmDividendHandler
from market.dividends import DividendSchedule
from utils.date import Date
from utils.enum import ExerciseType
from utils.error import FinError
from utils.globals import FDM_TIME_TOL
from utils.helper import unique_sorted, validate_enum


class FdmStepConditionComposite:
    def __init__(self, stopping_times: Iterable[Iterable[float]] = (), conditions: Iterable = ()):
        self._conditions = list(conditions)
        all_times = [t for times in stopping_times for t in times]
        self._stopping_times = unique_sorted(all_times, FDM_TIME_TOL)

    def conditions(self) -> List:
        return list(self._conditions)

    def stopping_times(self) -> List[float]:
        return list(self._stopping_times)

    def apply_to(self, a, t: float):
        for condition in self._conditions:
            condition.apply_to(a, t)

    @staticmethod
    def join_conditions(*composites):
        return FdmStepConditionComposite(
            [c.stopping_times() for c in composites], composites)

    @staticmethod
    def vanilla_composite(dividends: DividendSchedule, exercise_type: ExerciseType,
                          mesher, calculator, reference_date: Date,
                          equity_direction: int = 0):
        if not validate_enum(exercise_type, ExerciseType):
            raise FinError(f"Invalid ExerciseType: {exercise_type}. Valid types: {list(ExerciseType)}")

        stopping_times = []
        conditions = []
        if dividends is not None and not dividends.empty():
            handler = FdmDividendHandler(dividends, mesher, reference_date, equity_direction)
            conditions.append(handler)
            stopping_times.append(handler.dividend_times())

        if exercise_type == ExerciseType.AMERICAN:
            conditions.append(FdmAmericanStepCondition(mesher, calculator))

        return FdmStepConditionComposite(stopping_times, conditions)
