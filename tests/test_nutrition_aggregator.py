"""Tests for nutrition sums, progress, status, scoring and advice."""

import datetime as dt

from schemas import DietType, MedicalCondition, NutritionData, NutritionStatus, PrimaryGoal
from schemas.nutrition_schema import Minerals, NutritionPercentage, NutritionProgress, Vitamins
from services.nutrition_aggregator import (
    B12_ADVICE,
    COMPLETE_PROTEIN_ADVICE,
    CONDITION_ADVICE,
    FIBER_ACHIEVEMENT,
    HIGH_ADVICE,
    LOW_ADVICE,
    MUSCLE_GAIN_ADVICE,
    PROTEIN_ACHIEVEMENT,
    SCORE_ACHIEVEMENT,
    WEIGHT_LOSS_ADVICE,
    nutrition_aggregator as agg,
)
from services.nutrition_calculator import nutrition_calculator

DAY_DATE = dt.date(2025, 1, 1)


def _progress(calories=100, protein=100, carbs=100, fat=100, fiber=100):
    percentage = NutritionPercentage(calories=calories, protein=protein, carbs=carbs, fat=fat, fiber=fiber)
    return NutritionProgress(
        current=NutritionData(),
        target=NutritionData(),
        percentage=percentage,
        status=agg.status(percentage),
    )


def test_add_is_commutative_and_associative():
    a = NutritionData(calories=500, protein=30, fiber=4, vitamins=Vitamins(vitamin_c=20))
    b = NutritionData(calories=250, fat=12, minerals=Minerals(iron=3))
    c = NutritionData(carbs=40, sodium=300, vitamins=Vitamins(vitamin_c=5, folate=100))
    assert agg.add(a, b) == agg.add(b, a)
    assert agg.add(agg.add(a, b), c) == agg.add(a, agg.add(b, c))
    total = agg.total([a, b, c])
    assert total.calories == 750
    assert total.vitamins.vitamin_c == 25
    assert total.minerals.iron == 3


def test_total_of_nothing_is_zero():
    assert agg.total([]) == NutritionData()


def test_day_total_and_completed_total(generator):
    day = generator.build_day(1, DAY_DATE, 2000, DietType.OMNIVORE)
    assert agg.day_total(day).calories == 2000
    assert agg.completed_total(day).calories == 0

    day.breakfast.completed = True
    assert agg.completed_total(day).calories == 500
    assert agg.completed_total(day).protein == day.breakfast.nutrition.protein


def test_recalculate_day_totals_is_idempotent(generator):
    day = generator.build_day(3, DAY_DATE, 2345, DietType.PALEO)
    first = agg.recalculate_day_totals(day)
    assert first == agg.recalculate_day_totals(day) == day.total_calories == 2345


def test_progress_with_zero_target_is_zero_percent():
    current = NutritionData(calories=1000, protein=50, carbs=100, fat=30, fiber=10)
    target = NutritionData(calories=2000, protein=0, carbs=200, fat=60, fiber=0)
    progress = agg.progress(current, target)
    assert progress.percentage.protein == 0
    assert progress.percentage.fiber == 0
    assert progress.percentage.calories == 50


def test_status_thresholds():
    assert agg.status(NutritionPercentage(calories=100, protein=100, carbs=100, fat=100)) == NutritionStatus.OPTIMAL
    assert agg.status(NutritionPercentage(calories=80, protein=120, carbs=100, fat=100)) == NutritionStatus.OPTIMAL
    assert agg.status(NutritionPercentage(calories=79, protein=100, carbs=100, fat=100)) == NutritionStatus.DEFICIT
    assert agg.status(NutritionPercentage(calories=100, protein=121, carbs=100, fat=100)) == NutritionStatus.EXCESS


def test_status_deficit_wins_over_excess():
    assert agg.status(NutritionPercentage(calories=50, protein=150, carbs=100, fat=100)) == NutritionStatus.DEFICIT


def test_fiber_does_not_affect_status():
    assert agg.status(NutritionPercentage(calories=100, protein=100, carbs=100, fat=100, fiber=10)) == NutritionStatus.OPTIMAL


def test_score_weights():
    assert agg.score(_progress()) == 100
    assert agg.score(_progress(calories=85)) == 92
    assert agg.score(_progress(calories=150)) == 80
    assert agg.score(_progress(0, 0, 0, 0, 0)) == 0
    # fiber 40% -> 50 points, weighted 10%
    assert agg.score(_progress(fiber=40)) == 95


def test_recommendations_low_intake_order(male_profile):
    advice = agg.recommendations(_progress(50, 50, 50, 50, 50), male_profile)
    assert advice == [
        LOW_ADVICE["calories"],
        LOW_ADVICE["protein"],
        LOW_ADVICE["fat"],
        LOW_ADVICE["carbs"],
        LOW_ADVICE["fiber"],
    ]


def test_recommendations_high_intake(male_profile):
    advice = agg.recommendations(_progress(130, 130, 130, 130, 200), male_profile)
    assert advice == [HIGH_ADVICE["calories"], HIGH_ADVICE["protein"], HIGH_ADVICE["fat"], HIGH_ADVICE["carbs"]]


def test_vegetarian_advice(vegetarian_profile):
    low = agg.recommendations(_progress(protein=60), vegetarian_profile)
    assert COMPLETE_PROTEIN_ADVICE in low
    assert low[-1] == B12_ADVICE
    ok = agg.recommendations(_progress(), vegetarian_profile)
    assert ok == [B12_ADVICE]


def test_goal_advice(male_profile):
    loss = male_profile.model_copy(update={"primary_goal": PrimaryGoal.WEIGHT_LOSS})
    gain = male_profile.model_copy(update={"primary_goal": PrimaryGoal.MUSCLE_GAIN})
    assert WEIGHT_LOSS_ADVICE in agg.recommendations(_progress(calories=130), loss)
    assert WEIGHT_LOSS_ADVICE not in agg.recommendations(_progress(calories=60), loss)
    assert MUSCLE_GAIN_ADVICE in agg.recommendations(_progress(calories=60), gain)


def test_condition_advice_respects_none_sentinel(male_profile):
    diabetic = male_profile.model_copy(update={"medical_conditions": {MedicalCondition.DIABETES}})
    assert agg.recommendations(_progress(), diabetic) == [CONDITION_ADVICE[MedicalCondition.DIABETES]]

    suppressed = male_profile.model_copy(update={
        "medical_conditions": {MedicalCondition.NONE, MedicalCondition.DIABETES},
    })
    assert agg.recommendations(_progress(), suppressed) == []

    other = male_profile.model_copy(update={"medical_conditions": {MedicalCondition.OTHER}})
    assert agg.recommendations(_progress(), other) == []


def test_achievements():
    assert agg.achievements(_progress(protein=105, fiber=100), 95) == [
        FIBER_ACHIEVEMENT, PROTEIN_ACHIEVEMENT, SCORE_ACHIEVEMENT,
    ]
    assert agg.achievements(_progress(protein=111, fiber=99), 89) == []


def test_daily_report_counts_completed_meals_only(generator, male_profile):
    targets = nutrition_calculator.calculate_targets(male_profile)
    day = generator.build_day(1, DAY_DATE, targets.daily_calories, DietType.OMNIVORE)
    for meal in day.meals():
        meal.completed = True

    report = agg.daily_report(day, male_profile)
    assert report.date == DAY_DATE
    assert report.nutrition.calories == targets.daily_calories
    assert report.goals.percentage.calories == 100
    assert report.goals.target.calories == targets.daily_calories
    assert 0 <= report.score <= 100

    day.dinner.completed = False
    partial = agg.daily_report(day, male_profile, targets)
    assert partial.nutrition.calories == targets.daily_calories - day.dinner.nutrition.calories
    assert partial.goals.status == NutritionStatus.DEFICIT


def test_empty_day_report(generator, male_profile):
    day = generator.build_day(1, DAY_DATE, 2701, DietType.OMNIVORE)
    report = agg.daily_report(day, male_profile)
    assert report.score == 0
    assert report.achievements == []
    assert report.recommendations[0] == LOW_ADVICE["calories"]


def test_check_deficiencies():
    goals = NutritionData(protein=100, fiber=30, vitamins=Vitamins(vitamin_c=90), minerals=Minerals(iron=8, calcium=1000))
    low = NutritionData(protein=50, fiber=10, vitamins=Vitamins(vitamin_c=10), minerals=Minerals(iron=2, calcium=100))
    found = agg.check_deficiencies(low, goals)
    assert len(found) == 5
    assert found[0].startswith("Protein deficiency")

    unrecorded = NutritionData(protein=100, fiber=30)
    assert agg.check_deficiencies(unrecorded, goals) == []
