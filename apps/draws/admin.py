from django.contrib import admin

from .models import Draw, IngestionLog


class ReadOnlyAdmin(admin.ModelAdmin):
    # Rows come from the updater only.
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Draw)
class DrawAdmin(ReadOnlyAdmin):
    list_display = ('date', 'number_1', 'number_2', 'number_3', 'number_4', 'number_5', 'star_1', 'star_2')
    list_filter = ('date',)
    search_fields = ('date',)


@admin.register(IngestionLog)
class IngestionLogAdmin(ReadOnlyAdmin):
    list_display = ('run_at', 'source', 'outcome', 'stage', 'draw_date')
    list_filter = ('outcome', 'source', 'run_at')
