from data_designer.plugins.plugin import Plugin, PluginType

verticality_plugin = Plugin(
    config_qualified_name="data_designer_verticality.config.VerticalityColumnConfig",
    impl_qualified_name="data_designer_verticality.generator.VerticalityColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
