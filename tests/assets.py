"""Shared FTL assets keyed by physical path, as served to the loader in tests."""

TOOLKIT = "/firefox/toolkit/locales/en-US/toolkit/"
BROWSER = "/firefox/browser/locales/en-US/browser/"
BRANDING = "/firefox/browser/branding/nightly/locales/en-US/"

ASSETS: dict[str, str] = {
    TOOLKIT + "global/commands.ftl": "save = Save\ncancel = Cancel\n",
    TOOLKIT + "global/greeting.ftl": "hello = Hello, { $name }!\n",
    BROWSER + "preferences.ftl": (
        "pref-title = Preferences\n"
        "pref-button =\n"
        "    .label = Open { -brand-short-name }\n"
        "    .accesskey = O\n"
    ),
    BRANDING + "brand.ftl": "-brand-short-name = Nightly\n",
    TOOLKIT + "broken.ftl": "ok = Fine\nthis is not ftl\n",
}
