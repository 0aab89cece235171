"""
Newsletter Renderer
===================

Converts a newsletter document (blocks + template settings) into a complete
HTML email. Every block renders to one table row with inline CSS inside a
600px container, which is what Outlook and webmail clients handle reliably.

Footers link to the {{unsubscribe_url}} token. It is only replaced when an
explicit unsubscribe_url is given; otherwise the mail sender fills it in per
recipient.
"""

import logging

from .blocks import render_export_block
from .blocks.base import attr, text
from .blocks.footer import UNSUBSCRIBE_TOKEN
from .defaults import resolve_template_settings

logger = logging.getLogger(__name__)

PREVIEW_TEXT = 'Newsletter preview'

# Client resets and the mobile breakpoint; everything else is inline
HEAD_STYLES = '''
    body, table, td, p, a, li, blockquote {
      -webkit-text-size-adjust: 100%;
      -ms-text-size-adjust: 100%;
    }
    table, td {
      mso-table-lspace: 0pt;
      mso-table-rspace: 0pt;
    }
    img {
      -ms-interpolation-mode: bicubic;
      border: 0;
      height: auto;
      line-height: 100%;
      outline: none;
      text-decoration: none;
    }
    body {
      height: 100% !important;
      margin: 0 !important;
      padding: 0 !important;
      width: 100% !important;
    }
    a[x-apple-data-detectors] {
      color: inherit !important;
      text-decoration: none !important;
      font-size: inherit !important;
      font-family: inherit !important;
      font-weight: inherit !important;
      line-height: inherit !important;
    }
    @media screen and (max-width: 600px) {
      .email-container {
        width: 100% !important;
      }
      .fluid {
        max-width: 100% !important;
        height: auto !important;
      }
    }'''

MSO_SETTINGS = '''<!--[if mso]>
  <noscript>
    <xml>
      <o:OfficeDocumentSettings>
        <o:PixelsPerInch>96</o:PixelsPerInch>
      </o:OfficeDocumentSettings>
    </xml>
  </noscript>
  <![endif]-->'''


def render_blocks_fragment(blocks, template_settings):
    """Concatenated table rows for the blocks, in array order"""
    resolved = resolve_template_settings(template_settings)
    return ''.join(render_export_block(block, resolved) for block in blocks)


def render_document(blocks, template_settings, unsubscribe_url=None, preview_text='', language='fr'):
    """Render a full newsletter into a complete HTML email.

    Args:
        blocks: ordered list of block dicts
        template_settings: document-wide colors and fonts (missing keys use defaults)
        unsubscribe_url: replaces the {{unsubscribe_url}} token when given
        preview_text: hidden pre-header shown by mail clients next to the subject
        language: value of the html lang attribute

    Returns:
        Complete HTML email string with all inline CSS
    """
    ts = resolve_template_settings(template_settings)
    body = render_blocks_fragment(blocks, ts)

    pre_header = ''
    if preview_text:
        pre_header = (
            f'<div style="display: none; max-height: 0; overflow: hidden;">'
            f'{text(preview_text)}</div>'
        )

    background = attr(ts['backgroundColor'])
    html = f'''<!DOCTYPE html>
<html lang="{attr(language)}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta http-equiv="X-UA-Compatible" content="IE=edge">
  <title>Newsletter</title>
  {MSO_SETTINGS}
  <style>{HEAD_STYLES}
  </style>
</head>
<body style="margin: 0; padding: 0; background-color: {background}; font-family: {ts['fontFamilyCss']}; font-size: {ts['fontSizePx']};">
  {pre_header}
  <table role="presentation" cellspacing="0" cellpadding="0" border="0" width="100%" style="background-color: {background};">
    <tr>
      <td align="center" style="padding: 20px 10px;">
        <table role="presentation" class="email-container" cellspacing="0" cellpadding="0" border="0" width="600" style="margin: 0 auto; background-color: #ffffff;">
          {body}
        </table>
      </td>
    </tr>
  </table>
</body>
</html>'''

    if unsubscribe_url:
        html = html.replace(UNSUBSCRIBE_TOKEN, attr(unsubscribe_url))

    logger.debug(f"Rendered newsletter with {len(blocks)} blocks ({len(html)} chars)")
    return html


def render_preview(blocks, template_settings, language='fr'):
    """Browser preview: the email render with a pre-header line"""
    return render_document(blocks, template_settings, preview_text=PREVIEW_TEXT, language=language)
