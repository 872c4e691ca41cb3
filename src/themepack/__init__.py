"""
Theme packaging task collection.
"""

__version__ = '0.1.0'

from invoke import Collection

# Create namespace and collect tasks from each submodule
namespace = Collection()

from .build.tasks import build, develop, deploy

for submodule in [build, develop, deploy]:
    submodule_collection = Collection.from_module(submodule)
    for task_name, task in submodule_collection.tasks.items():
        namespace.add_task(task, default=submodule_collection.default == task_name)
