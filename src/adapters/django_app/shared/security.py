"""
Hash de senhas via django.contrib.auth.hashers.

O algoritmo vem de settings.PASSWORD_HASHERS (o primeiro da lista
gera novos hashes). Em produção: BCryptSHA256PasswordHasher.
"""

from django.contrib.auth.hashers import check_password, make_password


class DjangoPasswordHasher:
    """Implementação do port PasswordHasher com os hashers do Django."""

    def hash(self, password: str) -> str:
        return make_password(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return check_password(password, password_hash)
