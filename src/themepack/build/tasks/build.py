"""Build module for WordPress themes.

This module assembles the release pipeline: version stamp, Sass compile,
copy into dist/<name>, concat and minify the optimization blocks of the
templates, fingerprint the bundles, rewrite the templates to use them and
zip the result.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from invoke import task

from themepack.build import files, filerev, plugins, replace, usemin
from themepack.build.config.settings import Settings, load_settings
from themepack.build.pipeline import Pipeline
from themepack.build.tasks.decorators import build_task

logger = logging.getLogger(__name__)


@dataclass
class BuildState:
    """Values handed from one build step to the next within a run."""
    preparation: Optional[usemin.Preparation] = None
    revisions: Dict[str, str] = field(default_factory=dict)


def stamp_version(settings: Settings):
    """Write the package version into the theme header of style.css."""
    targets = [settings.path(template) for template in settings.layout.version_files]
    return replace.replace_in_files(targets, replace.version_replacements(settings.pkg.version))


def compile_styles(ctx, settings: Settings, target: str):
    return plugins.compile_sass(
        ctx, settings.layout.sass, target,
        sass_dir=settings.path('{paths.base}/{paths.sass}'),
        base_dir=settings.base_dir,
    )


def add_compile_step(pipeline: Pipeline, ctx, settings: Settings, target: str) -> Pipeline:
    """Compile styles, alongside the secondary compile command when one is configured."""
    name = f"sass:{target}"
    secondary = settings.layout.secondary_compile
    if not secondary:
        return pipeline.add(name, lambda: compile_styles(ctx, settings, target))
    return pipeline.add_concurrent(f"concurrent:{target}", {
        name: lambda: compile_styles(ctx, settings, target),
        'secondary': lambda: plugins.run_shell(ctx, secondary, cwd=settings.base_dir),
    })


def template_paths(settings: Settings):
    return [settings.release_dir / name for name in settings.layout.templates]


def usemin_prepare(settings: Settings, state: BuildState):
    release = settings.release_dir.as_posix()
    state.preparation = usemin.prepare(
        template_paths(settings),
        root=release,
        dest=release,
        staging=(settings.root / settings.layout.staging).as_posix(),
        placeholder=settings.placeholder,
    )
    return state.preparation


def run_optimization(settings: Settings, state: BuildState, step: str):
    configs = state.preparation.steps.get(step, []) if state.preparation else []
    return usemin.run_step(step, configs, separator=settings.layout.concat_separator)


def revision_assets(settings: Settings, state: BuildState):
    rev = settings.layout.revision
    state.revisions = filerev.revision(rev.src, settings.release_dir, rev.algorithm, rev.length)
    return state.revisions


def usemin_rewrite(settings: Settings, state: BuildState):
    release = settings.release_dir.as_posix()
    rewritten = []
    for template, blocks in state.preparation.blocks.items():
        rewritten.append(usemin.rewrite_template(
            Path(template), blocks, release, state.revisions, settings.placeholder
        ))
    return rewritten


def restore_placeholder(settings: Settings):
    return replace.replace_in_files(
        template_paths(settings), replace.placeholder_replacements(settings.placeholder)
    )


def clean_release(settings: Settings):
    removed = files.clean(settings.layout.clean_release, settings.release_dir)
    files.remove_tree(settings.root / settings.layout.staging)
    return removed


def build_pipeline(ctx, settings: Settings) -> Pipeline:
    """The release pipeline; steps share one BuildState."""
    state = BuildState()
    pipeline = Pipeline('build')
    pipeline.add('replace:version', lambda: stamp_version(settings))
    pipeline.add('clean:dist', lambda: files.remove_tree(settings.dist_dir))
    add_compile_step(pipeline, ctx, settings, 'dist')
    pipeline.add('copy', lambda: files.copy_files(
        settings.layout.copy_src, settings.base_dir, settings.release_dir))
    pipeline.add('useminPrepare', lambda: usemin_prepare(settings, state))
    pipeline.add('concat', lambda: run_optimization(settings, state, 'concat'))
    pipeline.add('uglify', lambda: run_optimization(settings, state, 'uglify'))
    pipeline.add('cssmin', lambda: run_optimization(settings, state, 'cssmin'))
    pipeline.add('filerev', lambda: revision_assets(settings, state))
    pipeline.add('usemin', lambda: usemin_rewrite(settings, state))
    pipeline.add('replace:scripts', lambda: restore_placeholder(settings))
    pipeline.add('clean:release', lambda: clean_release(settings))
    pipeline.add('zip', lambda: files.zip_directory(settings.release_dir, settings.archive_path))
    return pipeline


@task(default=True, help={'debug': 'Enable debug logging'})
@build_task
def build(ctx, debug=False):
    """
    Build the release archive dist/<name>-<version>.zip.

    Examples:
        themepack build
        themepack build --debug
    """
    settings = load_settings()
    build_pipeline(ctx, settings).run()
    print("")
    print("🎉 Build completed!")
    print(f"📦 Archive: {settings.archive_path}")
    return settings.archive_path


@task(help={'debug': 'Enable debug logging'})
@build_task
def version(ctx, debug=False):
    """Stamp the package.json version into the theme's style.css header."""
    settings = load_settings()
    changed = stamp_version(settings)
    if changed:
        print(f"✅ Version {settings.pkg.version} written to {', '.join(str(p) for p in changed)}")
    else:
        print(f"✅ Version {settings.pkg.version} already current")


@task(help={'debug': 'Enable debug logging'})
@build_task
def clean(ctx, debug=False):
    """Remove the dist directory and the staging directory."""
    settings = load_settings()
    for path in (settings.dist_dir, settings.root / settings.layout.staging):
        if files.remove_tree(path):
            print(f"🧹 Removed {path}")
