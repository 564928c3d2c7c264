"""Checks for newer releases of the system."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests

USER_AGENT = "Aurorae++ Update Checker"
_RELEASES_URL = "https://api.github.com/repos/{owner}/releases/latest"


class UpdateCheckError(Exception):
    """Raised when release information cannot be obtained."""


@dataclass
class GitHubRelease:
    """Latest published release of a repository."""

    tag_name: str
    name: str
    html_url: str
    body: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> GitHubRelease:
        try:
            tag_name, name, html_url = data["tag_name"], data["name"], data["html_url"]
            body = data.get("body")
        except (KeyError, TypeError, AttributeError) as exc:
            raise UpdateCheckError(f"Réponse de release invalide: {exc}") from exc
        if not all(isinstance(v, str) for v in (tag_name, name, html_url)):
            raise UpdateCheckError("Réponse de release invalide")
        if body is not None and not isinstance(body, str):
            raise UpdateCheckError("Réponse de release invalide")
        return cls(tag_name=tag_name, name=name, html_url=html_url, body=body)


@dataclass
class UpdateChecker:
    """Compares the running version with the latest published release."""

    repo_owner: str
    repo_name: str
    current_version: str

    @property
    def url(self) -> str:
        return _RELEASES_URL.format(owner=self.repo_owner)

    def check_for_updates(self) -> GitHubRelease:
        """Fetch the latest release, report whether it differs, and return it."""
        try:
            response = requests.get(self.url, headers={"User-Agent": USER_AGENT})
        except requests.RequestException as exc:
            raise UpdateCheckError(str(exc)) from exc

        if not response.ok:
            raise UpdateCheckError(
                "Erreur lors de la récupération des informations de mise à jour."
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise UpdateCheckError(str(exc)) from exc

        release = GitHubRelease.from_dict(data)
        if release.tag_name != self.current_version:
            print(
                f"[AURORAE++] Nouvelle version disponible : {release.tag_name} "
                f"(Votre version : {self.current_version})"
            )
            print(f"Détails : {release.body or 'Pas de détails.'}\n")
            print(f"Mise à jour disponible sur : {release.html_url}")
        else:
            print("[AURORAE++] Vous utilisez la dernière version !")
        return release