"""Deploy module: build the theme, then sync the release to the remote host."""

import logging

from invoke import task

from themepack.build import plugins
from themepack.build.config.settings import Settings, load_settings
from themepack.build.pipeline import Pipeline
from themepack.build.tasks.build import build_pipeline
from themepack.build.tasks.decorators import build_task

logger = logging.getLogger(__name__)


def sync_release(ctx, settings: Settings):
    """rsync dist/<name>/ to username@host:path over ssh."""
    return plugins.rsync(ctx, settings.layout.rsync, settings.release_dir, settings.deployment)


def deploy_pipeline(ctx, settings: Settings) -> Pipeline:
    pipeline = Pipeline('deploy')
    pipeline.extend(build_pipeline(ctx, settings))
    pipeline.add('rsync:server', lambda: sync_release(ctx, settings))
    return pipeline


@task(help={'debug': 'Enable debug logging'})
@build_task
def deploy(ctx, debug=False):
    """
    Build the theme and sync it to the host in server.config.json.

    Examples:
        themepack deploy
    """
    settings = load_settings(require_deployment=True)
    deploy_pipeline(ctx, settings).run()
    print("")
    print(f"🎉 Deployed {settings.pkg.name} {settings.pkg.version} to {settings.deployment.destination}")
    return True
