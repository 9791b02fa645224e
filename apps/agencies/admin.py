"""
Agencies App - Admin Configuration
"""
from django.contrib import admin, messages

from apps.core.exceptions import AgencyActivationError

from .models import Agency
from .services import AgencyService


@admin.register(Agency)
class AgencyAdmin(admin.ModelAdmin):
    list_display = ['name', 'formatted_cnpj', 'branch', 'executive_name', 'balance_display', 'active', 'created_at']
    list_filter = ['active', 'branch']
    search_fields = ['name', 'cnpj', 'email', 'executive_name']
    readonly_fields = ['created_at', 'updated_at', 'balance_display']
    raw_id_fields = ['user']
    actions = ['activate_agencies', 'deactivate_agencies']

    def balance_display(self, obj):
        return f"{obj.balance} pts"
    balance_display.short_description = 'Saldo'

    def save_model(self, request, obj, form, change):
        # Ativação sempre passa pela regra de saldo
        wants_active = obj.active
        activation_changed = 'active' in form.changed_data
        if activation_changed:
            obj.active = False
        super().save_model(request, obj, form, change)
        if activation_changed and wants_active:
            try:
                AgencyService.set_active(obj, True)
            except AgencyActivationError as e:
                self.message_user(request, e.message, level=messages.ERROR)

    @admin.action(description='Ativar agências selecionadas')
    def activate_agencies(self, request, queryset):
        activated = 0
        for agency in queryset:
            try:
                AgencyService.set_active(agency, True)
                activated += 1
            except AgencyActivationError as e:
                self.message_user(request, f"{agency.name}: {e.message}", level=messages.WARNING)
        self.message_user(request, f"{activated} agência(s) ativada(s).")

    @admin.action(description='Desativar agências selecionadas')
    def deactivate_agencies(self, request, queryset):
        for agency in queryset:
            AgencyService.set_active(agency, False)
        self.message_user(request, f"{queryset.count()} agência(s) desativada(s).")
