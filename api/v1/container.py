"""
Repository instances and handler wiring for the API views.

Repositories are stateless adapters, so one instance of each serves
every request.
"""
from accounts.application.handlers.list_access_logs_handler import ListAccessLogsHandler
from accounts.infrastructure.repositories.django_access_log_repository import (
    DjangoAccessLogRepository,
)
from activations.application.handlers.activate_license_handler import (
    ActivateLicenseHandler,
    ListActivationLogsHandler,
    ValidateLicenseHandler,
)
from activations.infrastructure.repositories.django_activation_log_repository import (
    DjangoActivationLogRepository,
)
from billing.application.handlers.dashboard_handler import GetDashboardStatsHandler
from billing.application.handlers.transaction_handlers import (
    CreateTransactionHandler,
    ListTransactionsHandler,
    PayTransactionWithCreditsHandler,
    UpdateTransactionStatusHandler,
)
from billing.infrastructure.repositories.django_dashboard_repository import (
    DjangoDashboardRepository,
)
from billing.infrastructure.repositories.django_transaction_repository import (
    DjangoTransactionRepository,
)
from companies.application.handlers.client_handlers import (
    CreateClientHandler,
    GetClientHandler,
    ListClientsHandler,
    UpdateClientStatusHandler,
)
from companies.application.handlers.company_handlers import (
    CreateCompanyHandler,
    GetCompanyHandler,
    ListCompaniesHandler,
    ListDescendantsHandler,
    UpdateCompanyHandler,
)
from companies.application.services.scope_resolver import ScopeResolver
from companies.infrastructure.repositories.django_client_repository import DjangoClientRepository
from companies.infrastructure.repositories.django_company_repository import (
    DjangoCompanyRepository,
)
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.application.handlers.license_lifecycle_handlers import (
    RenewLicenseHandler,
    ResumeLicenseHandler,
    SuspendLicenseHandler,
)
from licenses.application.handlers.license_maintenance_handlers import (
    ProcessAutomaticRenewalsHandler,
    SweepLicenseStatusesHandler,
)
from licenses.application.handlers.list_licenses_handler import (
    GetLicenseHandler,
    ListExpiringLicensesHandler,
    ListLicensesHandler,
)
from licenses.application.services.license_access import LicenseAccess
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from products.application.handlers.product_handlers import (
    CreateProductHandler,
    GetProductHandler,
    ListProductsHandler,
)
from products.infrastructure.repositories.django_product_repository import DjangoProductRepository
from registrations.application.handlers.registration_handlers import (
    AssignRegistrationLicenseHandler,
    CountAuthorizedDevicesHandler,
    GetRegistrationHandler,
    ListRegistrationsHandler,
    RegisterDeviceHandler,
)
from registrations.infrastructure.repositories.django_registration_repository import (
    DjangoRegistrationRepository,
)
from wallets.application.handlers.wallet_handlers import (
    GetWalletHandler,
    ListWalletsHandler,
    ListWalletTransactionsHandler,
    RechargeWalletHandler,
    SpendCreditsHandler,
    TransferCreditsHandler,
)
from wallets.infrastructure.repositories.django_wallet_repository import DjangoWalletRepository

company_repository = DjangoCompanyRepository()
client_repository = DjangoClientRepository()
product_repository = DjangoProductRepository()
license_repository = DjangoLicenseRepository()
activation_log_repository = DjangoActivationLogRepository()
access_log_repository = DjangoAccessLogRepository()
transaction_repository = DjangoTransactionRepository()
dashboard_repository = DjangoDashboardRepository()
wallet_repository = DjangoWalletRepository()
registration_repository = DjangoRegistrationRepository()

scope_resolver = ScopeResolver(company_repository)
license_access = LicenseAccess(client_repository, scope_resolver)


# Companies and clients
def create_company_handler():
    return CreateCompanyHandler(company_repository, scope_resolver)


def update_company_handler():
    return UpdateCompanyHandler(company_repository, scope_resolver)


def list_companies_handler():
    return ListCompaniesHandler(company_repository, scope_resolver)


def get_company_handler():
    return GetCompanyHandler(company_repository, scope_resolver)


def list_descendants_handler():
    return ListDescendantsHandler(company_repository, scope_resolver)


def create_client_handler():
    return CreateClientHandler(client_repository, company_repository, scope_resolver)


def update_client_status_handler():
    return UpdateClientStatusHandler(client_repository, scope_resolver)


def list_clients_handler():
    return ListClientsHandler(client_repository, scope_resolver)


def get_client_handler():
    return GetClientHandler(client_repository, scope_resolver)


# Products
def create_product_handler():
    return CreateProductHandler(product_repository)


def list_products_handler():
    return ListProductsHandler(product_repository)


def get_product_handler():
    return GetProductHandler(product_repository)


# Licenses
def issue_license_handler():
    return IssueLicenseHandler(
        license_repository,
        client_repository,
        product_repository,
        transaction_repository,
        scope_resolver,
    )


def renew_license_handler():
    return RenewLicenseHandler(license_repository, transaction_repository, license_access)


def suspend_license_handler():
    return SuspendLicenseHandler(license_repository, license_access)


def resume_license_handler():
    return ResumeLicenseHandler(license_repository, license_access)


def list_licenses_handler():
    return ListLicensesHandler(license_repository, scope_resolver)


def get_license_handler():
    return GetLicenseHandler(license_repository, license_access)


def list_expiring_licenses_handler():
    return ListExpiringLicensesHandler(license_repository, scope_resolver)


def sweep_license_statuses_handler():
    return SweepLicenseStatusesHandler(license_repository)


def process_automatic_renewals_handler():
    return ProcessAutomaticRenewalsHandler(license_repository, client_repository, transaction_repository)


# Activation
def activate_license_handler():
    return ActivateLicenseHandler(license_repository, activation_log_repository)


def validate_license_handler():
    return ValidateLicenseHandler(license_repository, activation_log_repository)


def list_activation_logs_handler():
    return ListActivationLogsHandler(activation_log_repository, license_repository, license_access)


def list_access_logs_handler():
    return ListAccessLogsHandler(access_log_repository)


# Wallets
def recharge_wallet_handler():
    return RechargeWalletHandler(wallet_repository, scope_resolver)


def spend_credits_handler():
    return SpendCreditsHandler(wallet_repository, scope_resolver)


def transfer_credits_handler():
    return TransferCreditsHandler(wallet_repository, scope_resolver)


def get_wallet_handler():
    return GetWalletHandler(wallet_repository, company_repository, scope_resolver)


def list_wallets_handler():
    return ListWalletsHandler(wallet_repository, scope_resolver)


def list_wallet_transactions_handler():
    return ListWalletTransactionsHandler(wallet_repository, company_repository, scope_resolver)


# Billing
def create_transaction_handler():
    return CreateTransactionHandler(transaction_repository, license_repository, license_access)


def update_transaction_status_handler():
    return UpdateTransactionStatusHandler(transaction_repository, scope_resolver)


def pay_transaction_with_credits_handler():
    return PayTransactionWithCreditsHandler(transaction_repository, wallet_repository, scope_resolver)


def list_transactions_handler():
    return ListTransactionsHandler(transaction_repository, scope_resolver)


def dashboard_stats_handler():
    return GetDashboardStatsHandler(dashboard_repository, scope_resolver)


# Registrations
def register_device_handler():
    return RegisterDeviceHandler(registration_repository)


def assign_registration_license_handler():
    return AssignRegistrationLicenseHandler(registration_repository, license_repository, license_access)


def list_registrations_handler():
    return ListRegistrationsHandler(registration_repository, scope_resolver)


def get_registration_handler():
    return GetRegistrationHandler(registration_repository, license_repository, license_access)


def count_authorized_devices_handler():
    return CountAuthorizedDevicesHandler(registration_repository, license_repository, license_access)
