"""
Development tasks: compile styles in dev mode and watch for changes.
"""

import logging

from invoke import task
from livereload import Server

from themepack.build.config.settings import Settings, load_settings
from themepack.build.pipeline import Pipeline
from themepack.build.tasks.build import add_compile_step, compile_styles, stamp_version
from themepack.build.tasks.decorators import build_task

logger = logging.getLogger(__name__)


def make_recompiler(ctx, settings: Settings):
    """Watch callback recompiling the stylesheet; failures are reported and the watch goes on."""
    def recompile():
        print("🔄 Sass changed, recompiling...")
        try:
            compile_styles(ctx, settings, 'dev')
        except Exception as e:
            logger.error(f"Sass compile failed: {e}")
            print(f"❌ sass:dev failed: {e}")
            return
        print("✅ sass:dev")
    return recompile


def create_server(ctx, settings: Settings) -> Server:
    """Livereload server watching Sass sources and the files the browser loads."""
    watch = settings.layout.watch
    server = Server()
    recompile = make_recompiler(ctx, settings)
    for pattern in watch.sass:
        server.watch(str(settings.base_dir / settings.interpolate(pattern)), recompile)
    for pattern in watch.livereload:
        server.watch(str(settings.base_dir / settings.interpolate(pattern)))
    return server


def serve(server: Server, settings: Settings):
    watch = settings.layout.watch
    print(f"👀 Watching for changes (livereload on port {watch.liveport}), Ctrl+C to stop")
    server.serve(
        host=watch.host,
        port=watch.port,
        liveport=watch.liveport,
        root=str(settings.base_dir),
    )


def develop_pipeline(ctx, settings: Settings) -> Pipeline:
    pipeline = Pipeline('develop')
    pipeline.add('replace:version', lambda: stamp_version(settings))
    add_compile_step(pipeline, ctx, settings, 'dev')
    return pipeline


@task(help={'debug': 'Enable debug logging'})
@build_task
def develop(ctx, debug=False):
    """
    Compile styles for development, then watch and live-reload until interrupted.

    Examples:
        themepack develop
    """
    settings = load_settings()
    develop_pipeline(ctx, settings).run()
    serve(create_server(ctx, settings), settings)
