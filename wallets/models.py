from wallets.infrastructure.models import CompanyWallet, WalletTransaction  # noqa: F401
