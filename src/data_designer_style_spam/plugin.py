from data_designer.plugins.plugin import Plugin, PluginType

style_spam_plugin = Plugin(
    config_qualified_name="data_designer_style_spam.config.StyleSpamColumnConfig",
    impl_qualified_name="data_designer_style_spam.generator.StyleSpamColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
