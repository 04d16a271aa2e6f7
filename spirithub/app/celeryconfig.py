"""Configuration centralisée Celery pour les tâches asynchrones.

Le tick horaire est court et idempotent: un seul essai par déclenchement suffit, le
déclenchement suivant sert de reprise.
"""

from __future__ import annotations

# Acks
task_acks_late = True
task_reject_on_worker_lost = True
worker_prefetch_multiplier = 1
task_time_limit = 60  # secondes
task_soft_time_limit = 45
broker_pool_limit = 10

# Beat: l'horloge de planification est en UTC; la date du jour est calculée par la tâche
# dans le fuseau de référence.
enable_utc = True
timezone = "UTC"

# Un tick manqué n'est jamais rejoué: le suivant couvre la même date
task_ignore_result = True
beat_max_loop_interval = 300
