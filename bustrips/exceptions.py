"""Domain errors raised by the services and translated to HTTP by the routers.

``ValueError`` subclasses map to 400; the ``*NotFoundError`` classes map to 404.
"""


class TripNotFoundError(LookupError):
    def __init__(self, trip_id: str):
        super().__init__("Trip not found")
        self.trip_id = trip_id


class PassengerNotFoundError(LookupError):
    def __init__(self, passenger_id: str):
        super().__init__("Passenger not found")
        self.passenger_id = passenger_id


class InvalidPaymentStatusError(ValueError):
    def __init__(self, value):
        super().__init__("Invalid value for hasPaid")
        self.value = value


class PassengerTripMismatchError(ValueError):
    def __init__(self, passenger_id: str, trip_id: str):
        super().__init__("Passenger does not belong to this trip")
        self.passenger_id = passenger_id
        self.trip_id = trip_id


class UnsupportedLanguageError(ValueError):
    def __init__(self, language: str):
        super().__init__(f"Unsupported manifest language: {language}")
        self.language = language
