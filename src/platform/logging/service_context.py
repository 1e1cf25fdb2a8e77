"""
Service context for log lines.

Identifies which process wrote a line so logs from several workers
(API replicas, the OTP cleanup job) can be told apart once aggregated.
"""

import os
from functools import lru_cache
import socket


def get_service_name() -> str:
    return os.getenv('SERVICE_NAME', 'hotel-booking')


@lru_cache(maxsize=1)
def get_service_context() -> str:
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container runtimes set HOSTNAME to the container id; fall back to PID locally
    instance = os.getenv('HOSTNAME') or socket.gethostname() or str(os.getpid())

    return f'{get_service_name()}@{deploy_env}:{instance[:12]}:{os.getpid()}'
