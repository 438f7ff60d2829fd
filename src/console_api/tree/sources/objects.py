"""Data source and library roots."""
from console_api.tree.categories import Category
from console_api.tree.collaborators import DataSourceRegistry, LibraryRegistry
from console_api.tree.merger import sort_nodes
from console_api.tree.schemas import (
    DataModelRecord,
    DataSourceRecord,
    ModelRecord,
    Node,
    QueryRecord,
    RequestContext,
)

LIBRARY_PATH = "*"
LIBRARY_LABEL = "Library"
SCRIPTS_LABEL = "Scripts"
TABLE_STYLES_LABEL = "Table Styles"
LIBRARY_SEPARATOR = "~"

DATA_SOURCE_ICONS: dict[str, str] = {
    "jdbc": "database-icon",
    "xmla": "cube-icon",
}


def data_source_icon(source_type: str) -> str:
    """Icon for a data source type; tabular for anything not JDBC or XMLA."""
    return DATA_SOURCE_ICONS.get(source_type.lower(), "tabular-data-icon")


def model_path(data_source: str, folder: str | None, name: str) -> str:
    """Path of a logical model or partition inside a data model.

    Args:
        data_source: Full name of the owning data source.
        folder: Data model folder, if any.
        name: Model name.

    Returns:
        ``data_source^[folder^]name``.
    """
    if folder:
        return f"{data_source}^{folder}^{name}"
    return f"{data_source}^{name}"


class ObjectSource:
    """Data Source and Library roots."""

    name = "objects"
    description = "object nodes"

    def __init__(
        self,
        data_sources: DataSourceRegistry,
        library: LibraryRegistry,
        ascending: bool = True,
    ) -> None:
        """Initialize the adapter.

        Args:
            data_sources: Data source registry.
            library: Script and table style registry.
            ascending: Label sort direction.
        """
        self._data_sources = data_sources
        self._library = library
        self._ascending = ascending

    def fetch(self, context: RequestContext) -> list[Node]:
        """Build the data source and library roots.

        Args:
            context: Caller context.

        Returns:
            The data source root followed by the library root.
        """
        return [
            Node(
                path="/",
                label="Data Source",
                category=Category.DATA_SOURCE_FOLDER,
                children=self._folder_children(None),
            ),
            Node(
                path=LIBRARY_PATH,
                label=LIBRARY_LABEL,
                full_path=LIBRARY_LABEL,
                category=Category.LIBRARY_FOLDER,
                icon="books-icon",
                children=[self._scripts(), self._table_styles()],
            ),
        ]

    # === Data sources ===

    def _folder_children(self, parent: str | None) -> list[Node]:
        folders = [
            Node(
                path=folder,
                label=folder.rsplit("/", 1)[-1],
                category=Category.DATA_SOURCE_FOLDER,
                children=self._folder_children(folder),
            )
            for folder in sorted(self._data_sources.subfolders(parent))
        ]
        sources = [
            self._data_source_node(record)
            for record in sorted(
                self._data_sources.list_data_sources(parent), key=lambda r: r.name
            )
        ]
        return folders + sources

    def _data_source_node(self, record: DataSourceRecord) -> Node:
        full_name = record.full_name
        models = self._model_nodes(full_name, record)
        queries = self._query_nodes(full_name, record)
        cubes = [
            Node(
                path=f"{full_name}/{cube}",
                label=cube,
                category=Category.CUBE,
                icon="cube-icon",
            )
            for cube in record.cubes
        ]

        children = (
            sort_nodes(models, self._ascending)
            + sort_nodes(queries, self._ascending)
            + sort_nodes(cubes, self._ascending)
        )

        return Node(
            path=full_name,
            label=record.name,
            category=Category.DATA_SOURCE,
            icon=data_source_icon(record.type),
            description=record.description,
            last_modified=record.last_modified,
            children=children,
        )

    def _model_nodes(self, full_name: str, record: DataSourceRecord) -> list[Node]:
        model = record.data_model
        if model is None:
            return []

        nodes = [
            Node(
                path=full_name,
                label="Data Model",
                category=Category.DATA_SOURCE,
                icon="db-model-icon",
                description=record.description,
                children=self._data_model_children(full_name, model),
            )
        ]

        nodes.extend(
            Node(
                path=f"{full_name}^{vpm.name}",
                label=vpm.name,
                category=Category.VPM,
                description=vpm.description,
                last_modified=vpm.last_modified,
            )
            for vpm in model.vpms
        )
        return nodes

    def _data_model_children(
        self, full_name: str, model: DataModelRecord
    ) -> list[Node]:
        by_folder: dict[str, list[Node]] = {folder: [] for folder in model.folders}
        root_items: list[Node] = []

        entries = [(p, Category.PARTITION) for p in model.partitions]
        entries += [(m, Category.LOGICAL_MODEL) for m in model.logical_models]

        for entry, category in entries:
            node = _model_node(full_name, entry, category)
            if entry.folder is not None and entry.folder in by_folder:
                by_folder[entry.folder].append(node)
            else:
                root_items.append(node)

        folders = [
            Node(
                path=f"{full_name}/{folder}",
                label=folder,
                category=Category.DATA_MODEL_FOLDER,
                icon="folder-icon",
                children=children,
            )
            for folder, children in by_folder.items()
        ]
        return folders + root_items

    def _query_nodes(self, full_name: str, record: DataSourceRecord) -> list[Node]:
        folders = [
            Node(
                path=f"{folder}::{full_name}",
                label=folder,
                category=Category.QUERY_FOLDER,
                description=record.description,
                children=[
                    _query_node(query)
                    for query in record.queries
                    if query.folder == folder
                ],
            )
            for folder in record.query_folders
        ]
        root_queries = [
            _query_node(query) for query in record.queries if query.folder is None
        ]
        return folders + root_queries

    # === Library ===

    def _scripts(self) -> Node:
        full_path = f"{LIBRARY_LABEL}/{SCRIPTS_LABEL}"
        scripts = [
            Node(
                path=script.name,
                label=script.name,
                full_path=f"{full_path}/{script.name}",
                category=Category.SCRIPT,
                description=script.description,
                last_modified=script.last_modified,
            )
            for script in self._library.scripts()
            if not script.audit
        ]
        scripts.sort(key=lambda n: n.label)

        return Node(
            path=SCRIPTS_LABEL,
            label=SCRIPTS_LABEL,
            full_path=full_path,
            category=Category.SCRIPT_FOLDER,
            children=scripts,
        )

    def _table_styles(self) -> Node:
        full_path = f"{LIBRARY_LABEL}/{TABLE_STYLES_LABEL}"
        return Node(
            path=LIBRARY_PATH,
            label=TABLE_STYLES_LABEL,
            full_path=full_path,
            category=Category.TABLE_STYLE_FOLDER,
            children=self._style_children(None, full_path),
        )

    def _style_children(self, folder: str | None, full_path: str) -> list[Node]:
        folders = []
        for name in self._library.table_style_folders(folder):
            label = _style_label(name)
            folders.append(
                Node(
                    path=name,
                    label=label,
                    full_path=f"{full_path}/{label}",
                    category=Category.TABLE_STYLE_FOLDER,
                    children=self._style_children(name, f"{full_path}/{label}"),
                )
            )

        styles = []
        for style in self._library.table_styles(folder):
            label = _style_label(style.name)
            styles.append(
                Node(
                    path=style.name,
                    label=label,
                    full_path=f"{full_path}/{label}",
                    category=Category.TABLE_STYLE,
                    description=style.description,
                    last_modified=style.last_modified,
                )
            )

        folders.sort(key=lambda n: n.label.upper())
        styles.sort(key=lambda n: n.label.upper())
        return folders + styles


_MODEL_STYLES: dict[Category, tuple[Category, str]] = {
    Category.PARTITION: (Category.PARTITION_EXTENSION, "partition-icon"),
    Category.LOGICAL_MODEL: (Category.LOGICAL_MODEL_EXTENSION, "logical-model-icon"),
}


def _model_node(data_source: str, entry: ModelRecord, category: Category) -> Node:
    extension_category, icon = _MODEL_STYLES[category]
    path = model_path(data_source, entry.folder, entry.name)
    return Node(
        path=path,
        label=entry.name,
        category=category,
        icon=icon,
        description=entry.description,
        last_modified=entry.last_modified,
        children=[
            Node(
                path=f"{path}^{extension}",
                label=extension,
                category=extension_category,
            )
            for extension in entry.extensions
        ],
    )


def _query_node(query: QueryRecord) -> Node:
    return Node(
        path=query.name,
        label=query.name,
        category=Category.QUERY,
        description=query.description,
        last_modified=query.last_modified,
    )


def _style_label(name: str) -> str:
    # nested style names are qualified with their folders
    return name.rsplit(LIBRARY_SEPARATOR, 1)[-1]
