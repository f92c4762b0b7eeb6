from django.apps import AppConfig  # type: ignore


class BookingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.bookings"
    verbose_name = "Screen bookings"

    def ready(self) -> None:
        from apps.bookings import handlers
        from apps.bookings.application.command_handlers import CreateBookingCommand, register_handlers
        from shared.application.message_bus import message_bus

        # ready() may run more than once (e.g. in tests)
        if message_bus.handles(CreateBookingCommand):
            return
        register_handlers(message_bus)
        handlers.register(message_bus)
