"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic

Every response body carries a ``message``; failures add ``error`` with the
underlying reason so storage problems can be diagnosed from the client.
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.cache import EVENT_LIST_KEY, cache_timeout, event_detail_key
from events.container import get_booking_service, get_event_service
from events.domain import Slug
from events.domain.errors import (
    DomainError,
    EventNotFoundError,
    EventReferenceError,
    InvalidSlugError,
    PersistenceError,
    ValidationError,
)
from events.handlers.serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    EventCreateSerializer,
    EventSerializer,
    EventSummarySerializer,
)
from events.stores.connection import database


class EventListView(APIView):
    """Handler for GET and POST /api/events"""

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request: Request) -> Response:
        payload = cache.get(EVENT_LIST_KEY)
        if payload is None:
            try:
                database.connect()
                events = get_event_service().list_events()
            except DomainError as exc:
                return _failure("Events fetching failed", exc)
            payload = list(EventSerializer(events, many=True).data)
            cache.set(EVENT_LIST_KEY, payload, cache_timeout())
        return Response({"message": "Events fetched successfully", "events": payload})

    def post(self, request: Request) -> Response:
        image = request.FILES.get("image")
        if image is None:
            return Response({"message": "Image is required"}, status=status.HTTP_400_BAD_REQUEST)

        serializer = EventCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_input(
                "Event creation failed", serializer.errors, status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        try:
            database.connect()
            event = get_event_service().create_event(serializer.validated_data, image=image)
        except ValidationError as exc:
            return _invalid("Event creation failed", exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
        except DomainError as exc:
            return _failure("Event creation failed", exc)

        return Response(
            {"message": "Event created successfully", "event": EventSerializer(event).data},
            status=status.HTTP_201_CREATED,
        )


class EventDetailView(APIView):
    """Handler for GET /api/events/{slug}"""

    def get(self, request: Request, slug: str) -> Response:
        try:
            slug = Slug.from_string(slug).value
        except InvalidSlugError as exc:
            return Response({"message": exc.message}, status=status.HTTP_400_BAD_REQUEST)

        key = event_detail_key(slug)
        payload = cache.get(key)
        if payload is None:
            try:
                database.connect()
                event = get_event_service().get_event(slug)
            except EventNotFoundError as exc:
                return Response({"message": exc.message}, status=status.HTTP_404_NOT_FOUND)
            except DomainError as exc:
                return _failure("Failed to fetch event", exc)
            payload = dict(EventSerializer(event).data)
            cache.set(key, payload, cache_timeout())
        return Response({"message": "Event fetched successfully", "event": payload})


class SimilarEventListView(APIView):
    """Handler for GET /api/events/{slug}/similar"""

    def get(self, request: Request, slug: str) -> Response:
        try:
            slug = Slug.from_string(slug).value
        except InvalidSlugError as exc:
            return Response({"message": exc.message}, status=status.HTTP_400_BAD_REQUEST)

        try:
            database.connect()
            events = get_event_service().get_similar_events(slug)
        except DomainError as exc:
            return _failure("Failed to fetch similar events", exc)
        return Response(
            {
                "message": "Similar events fetched successfully",
                "events": EventSummarySerializer(events, many=True).data,
            }
        )


class BookingCreateView(APIView):
    """Handler for POST /api/bookings"""

    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def post(self, request: Request) -> Response:
        serializer = BookingCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_input("Invalid booking data", serializer.errors)
        data = serializer.validated_data

        try:
            database.connect()
            booking = get_booking_service().create_booking(data.get("eventId"), data.get("email"))
        except ValidationError as exc:
            return _invalid("Invalid booking data", exc)
        except EventReferenceError as exc:
            return Response(
                {"message": "Invalid booking data", "error": exc.message, "field": "eventId"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except DomainError as exc:
            return _failure("Booking creation failed", exc)

        return Response(
            {"message": "Booking created successfully", "booking": BookingSerializer(booking).data},
            status=status.HTTP_201_CREATED,
        )


class HealthView(APIView):
    """Handler for GET /api/health"""

    def get(self, request: Request) -> Response:
        try:
            database.connect()
        except PersistenceError as exc:
            return Response(
                {"status": "unavailable", "database": database.state(), "error": exc.message},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return Response({"status": "ok", "database": database.state()})


def _invalid(message: str, exc: ValidationError, code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    return Response({"message": message, "error": exc.message, "field": exc.field}, status=code)


def _invalid_input(message: str, errors: dict, code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    field, detail = next(iter(errors.items()))
    return Response({"message": message, "error": _first_error(detail), "field": field}, status=code)


def _first_error(detail) -> str:
    if isinstance(detail, dict):
        return _first_error(next(iter(detail.values())))
    if isinstance(detail, list):
        return _first_error(detail[0])
    return str(detail)


def _failure(message: str, exc: DomainError) -> Response:
    return Response(
        {"message": message, "error": exc.message},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
