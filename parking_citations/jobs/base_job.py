import logging
import time

LOG = logging.getLogger(__name__)


class BaseJob:

    def perform(self, *args, **kwargs):
        raise NotImplementedError(
            'Subclassed job must implement this method.')

    def run(self, *args, **kwargs):
        job_name = type(self).__name__
        started_at = time.monotonic()

        LOG.info(f'{job_name} starting')

        try:
            return self.perform(*args, **kwargs)
        except NotImplementedError as ex:
            LOG.error(ex)
        finally:
            LOG.info(f'{job_name} finished in '
                     f'{time.monotonic() - started_at:.2f}s')
