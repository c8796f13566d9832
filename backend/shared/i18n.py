"""
Locale negotiation and the API message catalog.

Messages are looked up by code (error codes such as INVALID_CREDENTIALS,
or success keys such as auth.registered). Anything missing from a locale's
catalog falls back to the caller-supplied English text.
"""

from typing import Optional

SUPPORTED_LOCALES = ("en", "fr")
DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {},
    "fr": {
        # Success messages
        "auth.registered": "Inscription réussie. Consultez votre e-mail pour le code de vérification.",
        "auth.email_verified": "E-mail vérifié avec succès.",
        "auth.code_resent": "Un nouveau code de vérification a été envoyé.",
        "auth.logged_in": "Connexion réussie.",
        "auth.reset_code_sent": "Un code de réinitialisation a été envoyé à votre e-mail.",
        "auth.password_reset": "Mot de passe réinitialisé avec succès.",
        "auth.password_changed": "Mot de passe modifié avec succès.",
        "users.invited": "Invitation envoyée avec succès.",
        "users.invitation_accepted": "Invitation acceptée ! Bienvenue dans l'équipe.",
        "users.permissions_updated": "Permissions mises à jour.",
        "users.removed": "Utilisateur supprimé avec succès.",
        "kyc.submitted": "Dossier KYC soumis avec succès.",
        "kyc.under_review": "Dossier KYC en cours d'examen.",
        "kyc.approved": "Dossier KYC approuvé.",
        "kyc.rejected": "Dossier KYC rejeté.",
        "restaurants.status_updated": "Statut du restaurant mis à jour.",
        "ingredients.created": "Ingrédient créé.",
        "ingredients.updated": "Ingrédient mis à jour.",
        "ingredients.deleted": "Ingrédient supprimé.",
        "ingredients.image_uploaded": "Image téléversée avec succès.",
        "ingredients.image_deleted": "Image supprimée avec succès.",
        # Errors
        "VALIDATION_FAILED": "Échec de la validation",
        "INVALID_CREDENTIALS": "E-mail ou mot de passe invalide",
        "EMAIL_NOT_VERIFIED": "Veuillez vérifier votre e-mail avant de continuer.",
        "ACCOUNT_INACTIVE": "Ce compte n'est pas actif.",
        "USER_ALREADY_EXISTS": "Un utilisateur avec cet e-mail existe déjà",
        "INVALID_VERIFICATION_CODE": "Code de vérification invalide ou expiré",
        "INVALID_RESET_CODE": "Code de réinitialisation invalide ou expiré",
        "INVALID_INVITATION": "Jeton d'invitation invalide ou expiré",
        "MISSING_TOKEN": "Non autorisé. Veuillez vous connecter pour accéder à cette ressource.",
        "INVALID_TOKEN": "Jeton invalide. Veuillez vous reconnecter.",
        "TOKEN_EXPIRED": "Jeton expiré. Veuillez vous reconnecter.",
        "INSUFFICIENT_PERMISSIONS": "Permissions insuffisantes.",
        "KYC_NOT_APPROVED": "Votre dossier KYC doit être approuvé pour accéder à cette ressource.",
        "USER_LIMIT_REACHED": "Limite d'utilisateurs atteinte pour votre forfait.",
        "RATE_LIMITED": "Trop de requêtes. Réessayez plus tard.",
        "ROUTE_NOT_FOUND": "Route introuvable",
        "INTERNAL_ERROR": "Erreur interne du serveur",
    },
}


def _parse_accept_language(header: str) -> list[tuple[str, float]]:
    """Parse an Accept-Language header into (tag, quality) pairs, best first."""
    entries: list[tuple[str, float]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        tag, _, params = part.partition(";")
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0
        entries.append((tag.strip().lower(), quality))
    # sort is stable, so equal weights keep header order
    return sorted(entries, key=lambda entry: entry[1], reverse=True)


def negotiate_locale(
    accept_language: Optional[str],
    supported: tuple[str, ...] = SUPPORTED_LOCALES,
    default: str = DEFAULT_LOCALE,
) -> str:
    """
    Pick the best supported locale for an Accept-Language header.

    Region subtags are ignored ("fr-CM" matches "fr"); "*" and unknown
    languages fall through to the default.
    """
    if not accept_language:
        return default

    for tag, quality in _parse_accept_language(accept_language):
        if quality <= 0:
            continue
        language = tag.split("-")[0]
        if language in supported:
            return language
    return default


def translate(key: Optional[str], locale: str, fallback: Optional[str] = None) -> Optional[str]:
    """Look up a message in the locale's catalog."""
    if key is None:
        return fallback
    return MESSAGES.get(locale, {}).get(key, fallback)
