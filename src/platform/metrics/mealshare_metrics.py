from prometheus_client import Counter, Histogram


class MealShareMetrics:
    """
    MealShare Core Metrics Collector

    Tracks account activity, meal publishing and the outcome of every reservation
    attempt (created / cooldown / sold_out / not_found / forbidden / error)
    """

    def __init__(self):
        # ========== Account Metrics ==========
        self.user_registrations = Counter(
            'mealshare_user_registrations_total',
            'Total registered accounts',
            ['role'],
        )

        self.login_attempts = Counter(
            'mealshare_login_attempts_total',
            'Total login attempts',
            ['result'],  # success/user_not_found/invalid_credentials
        )

        # ========== Meal Metrics ==========
        self.meals_created = Counter(
            'mealshare_meals_created_total',
            'Total meals published by merchants',
        )

        # ========== Reservation Metrics ==========
        self.reservation_requests = Counter(
            'mealshare_reservation_requests_total',
            'Total reservation attempts',
            ['result'],
        )

        self.reservation_duration = Histogram(
            'mealshare_reservation_duration_seconds',
            'Reservation processing time',
            ['result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0],
        )

    # ========== Helper Methods ==========

    def record_registration(self, *, role: str):
        self.user_registrations.labels(role=role).inc()

    def record_login(self, *, result: str):
        self.login_attempts.labels(result=result).inc()

    def record_meal_created(self):
        self.meals_created.inc()

    def record_reservation(self, *, result: str, duration: float):
        self.reservation_requests.labels(result=result).inc()
        self.reservation_duration.labels(result=result).observe(duration)


# Global metrics instance
metrics = MealShareMetrics()
