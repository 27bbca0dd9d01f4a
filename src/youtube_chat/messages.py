"""
User-facing message catalog.

Messages are looked up by key for a locale (``"es-MX"`` uses the ``"es"``
table), falling back to English and finally to the key itself.  ``{name}``
placeholders are substituted from keyword arguments.
"""

from __future__ import annotations

import locale as _locale

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "es": "Español",
    "fr": "Français",
    "de": "Deutsch",
    "it": "Italiano",
    "pt": "Português",
    "ru": "Русский",
    "ja": "日本語",
    "ko": "한국어",
    "zh": "中文",
    "ar": "العربية",
    "hi": "हिन्दी",
    "nl": "Nederlands",
    "pl": "Polski",
    "tr": "Türkçe",
    "vi": "Tiếng Việt",
    "th": "ไทย",
    "sv": "Svenska",
    "da": "Dansk",
    "fi": "Suomi",
    "no": "Norsk",
    "cs": "Čeština",
    "uk": "Українська",
}

_TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "usage_header": "Usage: youtube-chat <youtube-url>",
        "usage_examples": "\nExamples:",
        "usage_example_1": "  youtube-chat https://youtu.be/bZQun8Y4L2A",
        "usage_note": "\nNote: Use the /lang command to change language preferences interactively",
        "error_invalid_url": "Invalid YouTube URL format",
        "error_general": "❌ Error: {error}",
        "error_save_config": "❌ Failed to save config: {error}",
        "error_clipboard_copy": "❌ Failed to copy to clipboard: {error}",
        "error_file_save": "❌ Failed to save file: {error}",
        "error_generating_summary": "❌ Error generating summary: {error}",
        "chat_placeholder": "Type your question...",
        "chat_hint": "/ for commands",
        "chat_thinking": "Thinking...",
        "chat_goodbye": "👋 Goodbye!",
        "chat_reply_error": "Error: {error}",
        "chat_unknown_command": "Unknown command: {command}. Type / to see available commands.",
        "chat_command_hint": (
            "Note: Commands must start with / (e.g., /lang, /export). "
            "Your message was treated as regular text."
        ),
        "palette_footer": "↑/↓ • Tab/Enter • Esc",
        "prompt_select_footer": "↑/↓ to move • Enter to select • Esc to cancel",
        "prompt_text_footer": "Enter to confirm • Esc to cancel",
        "prompt_cancelled": "Cancelled.",
        "line_choice_prompt": "Enter your choice (1-{max}, blank to cancel): ",
        "line_invalid_choice": "❌ Invalid choice. Please enter a number between 1 and {max}.",
        "export_header": "Export Conversation",
        "export_option_clipboard": "Copy to clipboard",
        "export_option_clipboard_desc": "Copy the conversation to your system clipboard",
        "export_option_file": "Save to file",
        "export_option_file_desc": "Save the conversation to a file in the current directory",
        "export_clipboard_success": "✅ Conversation copied to clipboard!",
        "export_file_prompt": "Enter filename",
        "export_file_hint": "default: {filename}",
        "export_file_success": "✅ Conversation saved to: {filename}",
        "export_title": "YouTube Chat Conversation Export",
        "export_no_history": "No conversation history available.",
        "lang_header": "Language Settings (current: {language})",
        "lang_auto_detect": "Auto-detect (use system locale)",
        "lang_transcript_header": "Transcript preference",
        "lang_prefer_native": "Prefer my language",
        "lang_prefer_native_desc": "fallback to English if unavailable",
        "lang_prefer_accurate": "Always use English transcript",
        "lang_prefer_accurate_desc": "most accurate",
        "lang_set_auto": "✅ Language set to auto-detect (system locale)",
        "lang_set_to": "✅ Language set to: {name} ({code})",
        "lang_saved": "💾 Settings saved to {path}",
        "lang_effect_notice": "ℹ️  Changes will take effect when you load the next video",
        "model_stub": "Model selection is not available yet. Current model: {model}",
        "summary_generating": "🔄 Generating summary...",
        "summary_intro": "Based on the video \"{title}\", the main topics are:",
        "role_you": "You",
        "role_assistant": "Assistant",
        "system_prompt": (
            "You are a helpful assistant that answers questions about the YouTube "
            "video {video}. Always answer in {language_name}. Be concise and "
            "user-centric."
        ),
    },
    "es": {
        "usage_header": "Uso: youtube-chat <url-de-youtube>",
        "usage_examples": "\nEjemplos:",
        "usage_example_1": "  youtube-chat https://youtu.be/bZQun8Y4L2A",
        "usage_note": "\nNota: Use el comando /lang para cambiar las preferencias de idioma de forma interactiva",
        "error_invalid_url": "Formato de URL de YouTube no válido",
        "error_general": "❌ Error: {error}",
        "error_save_config": "❌ Error al guardar configuración: {error}",
        "error_clipboard_copy": "❌ Error al copiar al portapapeles: {error}",
        "error_file_save": "❌ Error al guardar archivo: {error}",
        "error_generating_summary": "❌ Error al generar resumen: {error}",
        "chat_placeholder": "Escribe tu pregunta...",
        "chat_hint": "/ para comandos",
        "chat_thinking": "Pensando...",
        "chat_goodbye": "👋 ¡Hasta luego!",
        "chat_reply_error": "Error: {error}",
        "chat_unknown_command": "Comando desconocido: {command}. Escribe / para ver los comandos disponibles.",
        "chat_command_hint": (
            "Nota: Los comandos deben empezar con / (p. ej., /lang, /export). "
            "Tu mensaje se trató como texto normal."
        ),
        "palette_footer": "↑/↓ • Tab/Enter • Esc",
        "prompt_select_footer": "↑/↓ para moverte • Enter para elegir • Esc para cancelar",
        "prompt_text_footer": "Enter para confirmar • Esc para cancelar",
        "prompt_cancelled": "Cancelado.",
        "line_choice_prompt": "Ingresa tu elección (1-{max}, vacío para cancelar): ",
        "line_invalid_choice": "❌ Elección no válida. Por favor ingresa un número entre 1 y {max}.",
        "export_header": "Exportar Conversación",
        "export_option_clipboard": "Copiar al portapapeles",
        "export_option_clipboard_desc": "Copia la conversación al portapapeles del sistema",
        "export_option_file": "Guardar en archivo",
        "export_option_file_desc": "Guarda la conversación en un archivo en el directorio actual",
        "export_clipboard_success": "✅ ¡Conversación copiada al portapapeles!",
        "export_file_prompt": "Ingresa el nombre del archivo",
        "export_file_hint": "predeterminado: {filename}",
        "export_file_success": "✅ Conversación guardada en: {filename}",
        "export_title": "Exportación de Conversación de YouTube Chat",
        "export_no_history": "No hay historial de conversación disponible.",
        "lang_header": "Configuración de Idioma (actual: {language})",
        "lang_auto_detect": "Auto-detectar (usar localización del sistema)",
        "lang_transcript_header": "Preferencia de transcripción",
        "lang_prefer_native": "Preferir mi idioma",
        "lang_prefer_native_desc": "usar inglés si no está disponible",
        "lang_prefer_accurate": "Siempre usar transcripción en inglés",
        "lang_prefer_accurate_desc": "más precisa",
        "lang_set_auto": "✅ Idioma configurado en auto-detectar (localización del sistema)",
        "lang_set_to": "✅ Idioma configurado en: {name} ({code})",
        "lang_saved": "💾 Configuración guardada en {path}",
        "lang_effect_notice": "ℹ️  Los cambios tendrán efecto cuando cargues el próximo video",
        "model_stub": "La selección de modelo aún no está disponible. Modelo actual: {model}",
        "summary_generating": "🔄 Generando resumen...",
        "summary_intro": "Basado en el video \"{title}\", los temas principales son:",
        "role_you": "Tú",
        "role_assistant": "Asistente",
        "system_prompt": (
            "Eres un asistente útil que responde preguntas sobre el video de "
            "YouTube {video}. Responde siempre en {language_name}. Sé conciso y "
            "centrado en el usuario."
        ),
    },
    "fr": {
        "usage_header": "Usage: youtube-chat <url-youtube>",
        "usage_examples": "\nExemples:",
        "usage_example_1": "  youtube-chat https://youtu.be/bZQun8Y4L2A",
        "usage_note": (
            "\nRemarque: Utilisez la commande /lang pour modifier les préférences "
            "linguistiques de manière interactive"
        ),
        "error_invalid_url": "Format d'URL YouTube non valide",
        "error_general": "❌ Erreur: {error}",
        "error_save_config": "❌ Échec de l'enregistrement de la configuration: {error}",
        "error_clipboard_copy": "❌ Échec de la copie dans le presse-papiers: {error}",
        "error_file_save": "❌ Échec de l'enregistrement du fichier: {error}",
        "error_generating_summary": "❌ Erreur lors de la génération du résumé: {error}",
        "chat_placeholder": "Tapez votre question...",
        "chat_hint": "/ pour les commandes",
        "chat_thinking": "Réflexion...",
        "chat_goodbye": "👋 Au revoir!",
        "chat_reply_error": "Erreur: {error}",
        "chat_unknown_command": "Commande inconnue: {command}. Tapez / pour voir les commandes disponibles.",
        "chat_command_hint": (
            "Remarque: Les commandes doivent commencer par / (ex. /lang, /export). "
            "Votre message a été traité comme du texte normal."
        ),
        "palette_footer": "↑/↓ • Tab/Entrée • Échap",
        "prompt_select_footer": "↑/↓ pour naviguer • Entrée pour choisir • Échap pour annuler",
        "prompt_text_footer": "Entrée pour confirmer • Échap pour annuler",
        "prompt_cancelled": "Annulé.",
        "line_choice_prompt": "Entrez votre choix (1-{max}, vide pour annuler): ",
        "line_invalid_choice": "❌ Choix non valide. Veuillez entrer un nombre entre 1 et {max}.",
        "export_header": "Exporter la Conversation",
        "export_option_clipboard": "Copier dans le presse-papiers",
        "export_option_clipboard_desc": "Copie la conversation dans le presse-papiers du système",
        "export_option_file": "Enregistrer dans un fichier",
        "export_option_file_desc": "Enregistre la conversation dans un fichier du répertoire actuel",
        "export_clipboard_success": "✅ Conversation copiée dans le presse-papiers!",
        "export_file_prompt": "Entrez le nom du fichier",
        "export_file_hint": "par défaut: {filename}",
        "export_file_success": "✅ Conversation enregistrée dans: {filename}",
        "export_title": "Exportation de Conversation YouTube Chat",
        "export_no_history": "Aucun historique de conversation disponible.",
        "lang_header": "Paramètres de Langue (actuelle: {language})",
        "lang_auto_detect": "Détection automatique (utiliser la locale du système)",
        "lang_transcript_header": "Préférence de transcription",
        "lang_prefer_native": "Préférer ma langue",
        "lang_prefer_native_desc": "revenir à l'anglais si non disponible",
        "lang_prefer_accurate": "Toujours utiliser la transcription anglaise",
        "lang_prefer_accurate_desc": "plus précise",
        "lang_set_auto": "✅ Langue définie sur détection automatique (locale du système)",
        "lang_set_to": "✅ Langue définie sur: {name} ({code})",
        "lang_saved": "💾 Paramètres enregistrés dans {path}",
        "lang_effect_notice": "ℹ️  Les modifications prendront effet lors du chargement de la prochaine vidéo",
        "model_stub": "La sélection du modèle n'est pas encore disponible. Modèle actuel: {model}",
        "summary_generating": "🔄 Génération du résumé...",
        "summary_intro": "D'après la vidéo \"{title}\", les principaux sujets sont:",
        "role_you": "Vous",
        "role_assistant": "Assistant",
        "system_prompt": (
            "Vous êtes un assistant utile qui répond aux questions sur la vidéo "
            "YouTube {video}. Répondez toujours en {language_name}. Soyez concis "
            "et centré sur l'utilisateur."
        ),
    },
    "de": {
        "usage_header": "Verwendung: youtube-chat <youtube-url>",
        "usage_examples": "\nBeispiele:",
        "usage_example_1": "  youtube-chat https://youtu.be/bZQun8Y4L2A",
        "usage_note": "\nHinweis: Verwenden Sie den Befehl /lang, um Spracheinstellungen interaktiv zu ändern",
        "error_invalid_url": "Ungültiges YouTube-URL-Format",
        "error_general": "❌ Fehler: {error}",
        "error_save_config": "❌ Konfiguration konnte nicht gespeichert werden: {error}",
        "error_clipboard_copy": "❌ Kopieren in die Zwischenablage fehlgeschlagen: {error}",
        "error_file_save": "❌ Datei konnte nicht gespeichert werden: {error}",
        "error_generating_summary": "❌ Fehler beim Generieren der Zusammenfassung: {error}",
        "chat_placeholder": "Geben Sie Ihre Frage ein...",
        "chat_hint": "/ für Befehle",
        "chat_thinking": "Denke nach...",
        "chat_goodbye": "👋 Auf Wiedersehen!",
        "chat_reply_error": "Fehler: {error}",
        "chat_unknown_command": "Unbekannter Befehl: {command}. Geben Sie / ein, um verfügbare Befehle zu sehen.",
        "chat_command_hint": (
            "Hinweis: Befehle müssen mit / beginnen (z. B. /lang, /export). "
            "Ihre Nachricht wurde als normaler Text behandelt."
        ),
        "palette_footer": "↑/↓ • Tab/Enter • Esc",
        "prompt_select_footer": "↑/↓ zum Bewegen • Enter zum Auswählen • Esc zum Abbrechen",
        "prompt_text_footer": "Enter zum Bestätigen • Esc zum Abbrechen",
        "prompt_cancelled": "Abgebrochen.",
        "line_choice_prompt": "Geben Sie Ihre Wahl ein (1-{max}, leer zum Abbrechen): ",
        "line_invalid_choice": "❌ Ungültige Wahl. Bitte geben Sie eine Zahl zwischen 1 und {max} ein.",
        "export_header": "Konversation Exportieren",
        "export_option_clipboard": "In Zwischenablage kopieren",
        "export_option_clipboard_desc": "Kopiert die Konversation in die System-Zwischenablage",
        "export_option_file": "In Datei speichern",
        "export_option_file_desc": "Speichert die Konversation in einer Datei im aktuellen Verzeichnis",
        "export_clipboard_success": "✅ Konversation in Zwischenablage kopiert!",
        "export_file_prompt": "Geben Sie den Dateinamen ein",
        "export_file_hint": "Standard: {filename}",
        "export_file_success": "✅ Konversation gespeichert in: {filename}",
        "export_title": "YouTube Chat Konversation Export",
        "export_no_history": "Kein Konversationsverlauf verfügbar.",
        "lang_header": "Spracheinstellungen (aktuell: {language})",
        "lang_auto_detect": "Automatisch erkennen (System-Gebietsschema verwenden)",
        "lang_transcript_header": "Transkript-Präferenz",
        "lang_prefer_native": "Meine Sprache bevorzugen",
        "lang_prefer_native_desc": "auf Englisch zurückgreifen, falls nicht verfügbar",
        "lang_prefer_accurate": "Immer englisches Transkript verwenden",
        "lang_prefer_accurate_desc": "am genauesten",
        "lang_set_auto": "✅ Sprache auf automatische Erkennung eingestellt (System-Gebietsschema)",
        "lang_set_to": "✅ Sprache eingestellt auf: {name} ({code})",
        "lang_saved": "💾 Einstellungen gespeichert in {path}",
        "lang_effect_notice": "ℹ️  Änderungen werden beim Laden des nächsten Videos wirksam",
        "model_stub": "Die Modellauswahl ist noch nicht verfügbar. Aktuelles Modell: {model}",
        "summary_generating": "🔄 Zusammenfassung wird generiert...",
        "summary_intro": "Basierend auf dem Video \"{title}\" sind die Hauptthemen:",
        "role_you": "Sie",
        "role_assistant": "Assistent",
        "system_prompt": (
            "Sie sind ein hilfreicher Assistent, der Fragen zum YouTube-Video "
            "{video} beantwortet. Antworten Sie immer auf {language_name}. "
            "Fassen Sie sich kurz und richten Sie sich nach dem Benutzer."
        ),
    },
}


def get_message(key: str, locale: str | None = None, **params: object) -> str:
    """Return the message *key* for *locale* with ``{param}`` substitution."""
    language = locale.split("-")[0].split("_")[0] if locale else "en"
    table = _TRANSLATIONS.get(language, _TRANSLATIONS["en"])
    message = table.get(key) or _TRANSLATIONS["en"].get(key) or key
    for name, value in params.items():
        message = message.replace(f"{{{name}}}", str(value))
    return message


def get_language_name(code: str) -> str:
    """Display name for a language code, e.g. ``"es"`` -> ``"Español"``."""
    return LANGUAGE_NAMES.get(code, code.upper())


def language_entries() -> list[tuple[str, str]]:
    """All supported ``(code, name)`` pairs in catalog order."""
    return list(LANGUAGE_NAMES.items())


def detect_locale(language: str | None = None, locale: str | None = None) -> tuple[str, str]:
    """
    Resolve ``(language, locale)`` from saved preferences or the system.

    Saved values win; otherwise the system locale is used and English is
    the last resort.
    """
    if language:
        return language, locale or language
    system = _locale.getlocale()[0] or "en_US"
    if system in ("C", "POSIX"):
        system = "en_US"
    system = system.replace("_", "-")
    return system.split("-")[0], system
