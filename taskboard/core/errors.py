"""Erreurs métier remontées par le repository.

Le transport les traduit en codes HTTP (voir ``taskboard.main``):
ValidationError -> 400, NotFound -> 404, StorageError -> 500.
"""


class TaskBoardError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskBoardError):
    """Entrée invalide: titre vide, statut inconnu, identifiant illisible."""

    status_code = 400


class NotFound(TaskBoardError):
    status_code = 404

    def __init__(self, task_id: int):
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class StorageError(TaskBoardError):
    """Échec de la base (connexion, contrainte, I/O)."""

    status_code = 500
